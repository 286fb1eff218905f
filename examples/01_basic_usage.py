"""
Basic GlobalPost Client Usage

Countries, tariff options, short order, label and invoice PDFs.
"""

from pathlib import Path

from globalpost_client import GlobalPostAPIError, GlobalPostClient

TOKEN = "your-test-token"
OUTPUT_DIR = Path(__file__).parent


def main():
    client = GlobalPostClient(TOKEN, "TEST", {
        "timeout": 10,
        "connect_timeout": 5,
        "max_retries": 1,
        "retry_delay": 0.2,
    })

    with client:
        try:
            print("\n=== Countries ===")
            countries = client.get_countries()
            print(f"Supported countries: {countries}")

            print("\n=== Tariff options ===")
            options = client.get_options({
                "from_country": "UA",
                "to_country": "US",
                "weight": 500,
                "length": 20,
                "width": 15,
                "height": 10,
                "package_type": "parcel",
            })
            print(options)

            print("\n=== Short order ===")
            order = client.create_short_order({
                "contragent_key": "your-contragent-key",
                "international_tariff_id": 123,
                "order_id": "ORDER-42",
                "recipient_country": "US",
                "recipient_city": "New York",
                "recipient_name": "John Doe",
                "recipient_phone": "+1000111222333",
                "recipient_email": "customer@example.com",
            })
            print(order)

            print("\n=== Documents ===")
            label = client.print_label("en", "ORDER-42")
            (OUTPUT_DIR / "label.pdf").write_bytes(label)

            invoice = client.print_invoice("ORDER-42")
            (OUTPUT_DIR / "invoice.pdf").write_bytes(invoice)
            print(f"Saved label ({len(label)} bytes) and invoice ({len(invoice)} bytes)")

        except GlobalPostAPIError as e:
            print(f"GlobalPost error [{e.code}]: {e.admin_message}")
            print(f"Details: {e.log_message}")


if __name__ == "__main__":
    main()
