"""
Basic usage - Export users to output/users.json
"""
import asyncio
from sunvoypy import SunvoyClient


async def main():
    # Session file mode (cookies saved to .cookies.json)
    async with SunvoyClient(".cookies.json") as sunvoy:
        bundle = await sunvoy.run("output/users.json")

        print(f"Session reused: {sunvoy.summary.session_reused}")
        print(f"Current user: {bundle.current_user.id}")

        print("\nUsers:")
        for user in bundle.users:
            print(f"  {user.name} <{user.email}>")


if __name__ == "__main__":
    asyncio.run(main())
