#!/usr/bin/env python
"""
flightconnect Async Example

Authenticates with a pre-issued token without blocking the event loop.
"""

import anyio

from flightconnect import connect_async

HOST = "localhost"
TOKEN = "your-token"


async def main():
    print("flightconnect - Async Example")
    print("=" * 50)

    conn = await connect_async(host=HOST, useEncryption="false", token=TOKEN, connection_timeout=30)
    async with conn:
        print(f"Connected: {conn.is_connected}")
        print(f"Call timeout: {conn.call_options.timeout}s")


if __name__ == "__main__":
    anyio.run(main)
