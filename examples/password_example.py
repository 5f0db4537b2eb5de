#!/usr/bin/env python
"""
flightconnect User/Password Example

Connects to a Flight SQL server with a user name and password and lists
the flights available with the authenticated call options.

Prerequisites:
    - A Flight SQL server reachable on HOST:PORT
"""

from flightconnect import connect, AuthenticationError, CommunicationError

# Replace with your server details
HOST = "localhost"
PORT = 32010
USER = "admin"
PASSWORD = "your-password"


def main():
    print("flightconnect - User/Password Example")
    print("=" * 50)

    try:
        conn = connect(
            f"host={HOST};port={PORT};useEncryption=false",
            user=USER,
            password=PASSWORD,
            login_timeout=10,
        )
    except AuthenticationError as e:
        print(f"Login rejected: {e}")
        return
    except CommunicationError as e:
        print(f"Server unreachable: {e}")
        return

    with conn:
        print(f"\nAuthenticated as: {conn.user}")
        print(f"Headers on every call: {[name for name, _ in conn.call_options.headers]}")

        print("\nAvailable flights:")
        print("-" * 40)
        for info in conn.client.list_flights(options=conn.flight_call_options()):
            print(f"  {info.descriptor}")


if __name__ == "__main__":
    main()
