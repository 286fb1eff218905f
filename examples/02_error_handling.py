"""
Error Handling Examples

Every failure surfaces as GlobalPostAPIError (or one of its subclasses)
with a stable code, an admin message and a detailed log message.
"""

from globalpost_client import (
    APITransportError,
    AuthenticationError,
    GlobalPostAPIError,
    GlobalPostClient,
    ServiceUnavailableError,
    ValidationFailedError,
    get_handled_codes,
)


def handle_by_subclass(client):
    """Catch specific subclasses first, the base class last."""
    print("\n=== Handling by subclass ===")

    try:
        client.create_short_order({"recipient_name": "John"})
    except AuthenticationError as e:
        print(f"Check the API token: {e.admin_message}")
    except ValidationFailedError as e:
        print(f"Fix the order payload: {e.log_message}")
    except (ServiceUnavailableError, APITransportError) as e:
        print(f"Temporary problem, try later [{e.code}]")
    except GlobalPostAPIError as e:
        print(f"Unexpected error: {e.to_dict()}")


def handle_by_code(client):
    """Stable codes are handy for storing in a database or showing in UI."""
    print("\n=== Handling by code ===")

    try:
        client.get_countries()
    except GlobalPostAPIError as e:
        print(f"code={e.code} http_status={e.http_status} api_code={e.api_code}")
        if e.response_body:
            print(f"raw body: {e.response_body[:200]!r}")


def show_handled_codes():
    print("\n=== Handled codes ===")
    handled = get_handled_codes()
    print(f"HTTP statuses: {handled['status']}")
    print(f"API codes: {handled['api']}")


if __name__ == "__main__":
    show_handled_codes()

    # Invalid token, every call fails with a classified error
    with GlobalPostClient("invalid-token", "TEST", {"max_retries": 0}) as client:
        handle_by_subclass(client)
        handle_by_code(client)
