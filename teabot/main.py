import sys
import signal
import asyncio
import logging

from teabot.config import load_private_keys, load_proxies, setup_logging
from teabot.console import Console, c
from teabot.menu import AppContext, display_dashboard, farewell, run_menu
from teabot.wallets import build_registry


async def main(console=None, environ=None):
    """Main application function. Returns the process exit code."""
    private_keys = load_private_keys(environ)
    if not private_keys:
        print(f"{c['R']}Error: No PRIVATE_KEYs found in .env file 🚫")
        logging.error("No PRIVATE_KEYs configured")
        return 1

    proxies = load_proxies()

    wallets = build_registry(private_keys, proxies)
    if not wallets:
        print(f"{c['R']}Error: No valid wallets found 🚫")
        logging.error("No valid wallets after parsing private keys")
        return 1

    logging.info(f"Loaded {len(wallets)} wallet(s) from {len(private_keys)} key(s)")
    ctx = AppContext(wallets, console or Console())
    try:
        await display_dashboard(ctx)
        return await run_menu(ctx)
    finally:
        await ctx.close()


def signal_handler(sig, frame):
    """Handle interrupt signals gracefully"""
    farewell()
    sys.exit(0)


def run():
    setup_logging()
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        code = asyncio.run(main())
    except KeyboardInterrupt:
        farewell()
        code = 0
    except Exception as e:
        print(f"\n{c['R']}💥 Fatal error: {e}")
        logging.error(f"Fatal application error: {e}")
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    run()
