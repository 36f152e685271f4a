"""Send sample triggers to a locally running debouncer.

Usage: uv run python send_triggers.py [target-url]
"""

import asyncio
import sys

import httpx

BASE_URL = "http://localhost:8000"


async def main():
    target = sys.argv[1] if len(sys.argv) > 1 else "https://httpbin.org/get"

    async with httpx.AsyncClient() as client:
        print("--- Health Check ---")
        r = await client.get(f"{BASE_URL}/health")
        print(f"  {r.status_code}: {r.json()}\n")

        print("--- Missing method (should fail) ---")
        r = await client.get(BASE_URL, params={"url": target})
        print(f"  {r.status_code}: {r.json()}\n")

        print("--- Burst of 3 triggers for the same key ---")
        for i in range(3):
            r = await client.get(
                BASE_URL,
                params={"url": target, "method": "GET", "headers[X-Burst]": str(i)},
            )
            print(f"  {r.status_code}: {r.json()}")
            await asyncio.sleep(0.5)
        print()

        print("--- Trigger with explicit id ---")
        r = await client.get(
            BASE_URL, params={"url": target, "method": "POST", "id": "nightly-build"}
        )
        print(f"  {r.status_code}: {r.json()}\n")

        print("--- POST request (ignored, should be 405) ---")
        r = await client.post(BASE_URL, params={"url": target, "method": "GET"})
        print(f"  {r.status_code}\n")

        print("Done! Check the server logs for the delayed dispatches.")


if __name__ == "__main__":
    asyncio.run(main())
