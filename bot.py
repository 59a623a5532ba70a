import asyncio
import logging
from aiogram import Bot, Dispatcher
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from planner.auth import AuthMiddleware
from planner.config import BOT_TOKEN, TZ, MORNING_DIGEST_HOUR, LOG_LEVEL
from planner.db import init_db
from planner.router import build_router
from planner.scheduler import send_morning_digest

log = logging.getLogger("planner")


async def main():
    if not BOT_TOKEN:
        raise RuntimeError("Добавьте BOT_TOKEN в .env")

    await init_db()
    bot = Bot(BOT_TOKEN)
    dp = Dispatcher()
    dp.message.middleware(AuthMiddleware())
    dp.callback_query.middleware(AuthMiddleware())
    dp.include_router(build_router())

    scheduler = AsyncIOScheduler(timezone=str(TZ))
    scheduler.add_job(send_morning_digest, "cron", hour=MORNING_DIGEST_HOUR, minute=0, args=[bot], id="morning_digest", coalesce=True)
    scheduler.start()

    log.info("Bot is up.")
    try:
        await dp.start_polling(bot)
    finally:
        scheduler.shutdown(wait=False)
        await bot.session.close()


if __name__ == "__main__":
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
