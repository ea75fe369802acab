import asyncio
import json
import os
import ssl

import websockets
from dotenv import load_dotenv

load_dotenv()

# This script uses OS env directly (no app config)
WS_URL = os.getenv("QUOTES_WS_URL", "wss://quotes.eccalls.mobi:18400")
SYMBOL = os.getenv("SYMBOL", "BTCUSD")


async def main():
    ctx = ssl.create_default_context()
    ctx.check_hostname = False
    ctx.verify_mode = ssl.CERT_NONE

    async with websockets.connect(WS_URL, ssl=ctx, ping_interval=20, ping_timeout=20) as ws:
        await ws.send(f"SUBSCRIBE: {SYMBOL}")
        print("Subscribed to:", SYMBOL)

        # Print the next 20 messages
        for i in range(20):
            try:
                raw = await asyncio.wait_for(ws.recv(), timeout=5)
            except asyncio.TimeoutError:
                print(i + 1, "NO_MESSAGE_IN_5S")
                break

            data = json.loads(raw)

            if not isinstance(data, dict) or "ticks" not in data:
                print(i + 1, "NON_TICK:", data)
                continue

            for t in data["ticks"] or []:
                print(i + 1, "TICK:", t.get("s"), "bid", t.get("b"), "ask", t.get("a"), "spr", t.get("spr"))

        await ws.send(f"UNSUBSCRIBE: {SYMBOL}")


if __name__ == "__main__":
    asyncio.run(main())
