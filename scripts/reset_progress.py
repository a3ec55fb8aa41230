import asyncio
import sys
import os

# Add project root to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.config import settings
from core.logger import setup_logging, logger
from services.progress_service import ProgressService
from services.storage_service import build_store

async def reset_progress():
    print("⚠️  WARNING: This will RESET ALL PROGRESS (stats, exam history, study streak).")
    print(f"Store backend: {settings.STORE_BACKEND}, user: {settings.USER_ID or 'default'}")
    confirm = input("Type 'CONFIRM' to proceed: ")

    if confirm != "CONFIRM":
        print("Operation cancelled.")
        return

    store = await build_store()
    try:
        service = ProgressService(store, user_id=settings.USER_ID)
        if await service.reset_all():
            print("✅ All progress has been reset successfully.")
        else:
            print("❌ Error resetting progress, see the log for details.")
    except Exception as e:
        print(f"❌ Error resetting progress: {e}")
        logger.error("Error resetting progress", error=str(e))
    finally:
        await store.close()

if __name__ == "__main__":
    setup_logging()
    if os.name == 'nt':
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())
    asyncio.run(reset_progress())
