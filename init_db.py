import asyncio

from backend.app.db import init_models


async def reset_models():
    # Drops and recreates every table - DEV MODE ONLY
    await init_models(drop=True)
    print(">>> Tables Created Successfully!")

if __name__ == "__main__":
    asyncio.run(reset_models())
