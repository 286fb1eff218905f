"""
Environment Configuration Examples.

Demonstrates loading the client from .env files and GLOBALPOST_* variables.
"""

import os

from globalpost_client.core.env_config import load_from_env, load_settings, print_config_summary


def example_1_load_from_env_file():
    """Example 1: Load from .env file."""
    print("\n" + "="*60)
    print("EXAMPLE 1: Load from .env")
    print("="*60 + "\n")

    # Create .env file for demo
    with open('.env', 'w') as f:
        f.write("GLOBALPOST_API_MODE=TEST\n")
        f.write("GLOBALPOST_API_TOKEN_TEST=your-test-token\n")
        f.write("GLOBALPOST_MAX_RETRIES=2\n")
        f.write("GLOBALPOST_LOG_FORMAT=colored\n")

    try:
        print_config_summary(load_settings())

        client = load_from_env()
        print(f"\nClient: {client!r}")
        client.close()
    finally:
        os.remove('.env')


def example_2_missing_token():
    """Example 2: No token for the selected mode."""
    print("\n" + "="*60)
    print("EXAMPLE 2: Missing token")
    print("="*60 + "\n")

    client = load_from_env(api_mode="PROD", api_token_prod="")
    print(f"load_from_env() returned: {client}")


def example_3_overrides():
    """Example 3: Explicit overrides win over environment."""
    print("\n" + "="*60)
    print("EXAMPLE 3: Overrides")
    print("="*60 + "\n")

    os.environ["GLOBALPOST_MAX_RETRIES"] = "5"
    try:
        settings = load_settings(api_token_test="your-test-token", max_retries=1, debug_log=True)
        print_config_summary(settings)
    finally:
        del os.environ["GLOBALPOST_MAX_RETRIES"]


if __name__ == "__main__":
    example_1_load_from_env_file()
    example_2_missing_token()
    example_3_overrides()
