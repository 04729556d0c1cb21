"""
Session management - Cookie snapshot reuse
"""
import asyncio
from sunvoypy import Credentials, SunvoyClient


async def main():
    # Method 1: Snapshot file
    # First run: logs in with SUNVOY_USERNAME / SUNVOY_PASSWORD
    # Next runs: reuses the saved cookies while the server accepts them
    client = SunvoyClient(".cookies.json")
    await client.start()

    print(f"Reused: {client.auth_result.reused}")

    await client.close()


    # Method 2: Explicit credentials, nothing written between runs
    async with SunvoyClient(credentials=Credentials("demo@example.org", "test")) as sunvoy:
        users = await sunvoy.get_users()
        print(f"Users: {len(users)}")


    # Logout and delete the snapshot
    async with SunvoyClient(".cookies.json") as sunvoy:
        await sunvoy.log_out()
        print("Logged out!")


if __name__ == "__main__":
    asyncio.run(main())
