#!/usr/bin/env python
"""
flightconnect Browser OAuth Example

Opens the system browser for the server's OAuth login and waits (up to two
minutes) for the bearer token. Ctrl+C aborts the wait.

Prerequisites:
    - A Flight SQL server with OAuth discovery enabled
"""

import logging
import signal

from flightconnect import AuthenticationError, Driver

HOST = "localhost"
PORT = 31337


def main():
    logging.basicConfig(level=logging.INFO)
    print("flightconnect - Browser OAuth Example")
    print("=" * 50)

    driver = Driver()
    conn = driver.create_connection(host=HOST, port=PORT, authType="external", login_timeout=10)

    # Ctrl+C interrupts the polling loop instead of waiting it out
    signal.signal(signal.SIGINT, lambda signum, frame: conn.abort())

    try:
        conn.connect()
    except AuthenticationError as e:
        print(f"OAuth login failed: {e}")
        return

    with conn:
        print(f"\nConnected: {conn!r}")


if __name__ == "__main__":
    main()
