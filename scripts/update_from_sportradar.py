import asyncio
import sys
import os

# Add app to path
sys.path.append(os.getcwd())

from app.db import SessionLocal, init_db
from app.services.sportradar import update_all

async def main():
    print("Starting Sportradar refresh...")
    init_db()
    db = SessionLocal()
    try:
        result = await update_all(db)
        print("Refresh Result:", result)
    finally:
        db.close()
        print("Done.")

if __name__ == "__main__":
    asyncio.run(main())
