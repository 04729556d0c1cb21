"""
Advanced usage - Proxy, retries, logging
"""
import asyncio
import logging

from sunvoypy import (
    APIConfig,
    ProxyConfig,
    RetryConfig,
    SunvoyClient,
    SunvoyException,
    TimeoutConfig,
    setup_logging,
)


async def main():
    logging.basicConfig(format="%(asctime)s %(name)s %(message)s")
    setup_logging(logging.DEBUG)

    config = APIConfig(
        proxy=ProxyConfig(url="http://proxy.example.com:8080", username="user", password="pass"),
        timeout=TimeoutConfig(total=60),
        retry=RetryConfig(max_attempts=5, base_delay=2.0),
    )

    async with SunvoyClient(".cookies.json", config=config) as sunvoy:
        try:
            bundle = await sunvoy.collect()
        except SunvoyException as e:
            print(f"Failed: {e}")
            print(sunvoy.summary)
            return

        token = bundle.current_user.access_token
        print(f"Access token present: {bool(token)}")
        print(f"Language: {bundle.current_user.language}")


if __name__ == "__main__":
    asyncio.run(main())
