import logging

from teabot import batch, operations
from teabot.console import InputClosed, c
from teabot.wallets import display_banner, display_wallet_info


class AppContext:
    """Process-wide state handed to every menu handler"""

    def __init__(self, wallets, console):
        self.wallets = wallets
        self.console = console

    async def close(self):
        """Close every wallet's RPC session"""
        for wallet in self.wallets:
            try:
                await wallet.w3.provider.disconnect()
            except Exception as e:
                logging.warning(f"Error closing connection for {wallet.address}: {e}")


def show_menu():
    """Display main menu"""
    print(f"\n{c['B']}{c['w']}===== MAIN MENU =====")
    print(f"{c['w']}1. Send TEA to random addresses")
    print(f"{c['w']}2. Stake TEA")
    print(f"{c['w']}3. Claim rewards")
    print(f"{c['w']}4. Withdraw stTEA")
    print(f"{c['w']}5. Daily task (100 transfers of 0.0001 TEA)")
    print(f"{c['w']}6. Exit")
    print(f"{c['w']}====================")


def farewell():
    print(f"\n{c['g']}Thank you for using TEA BOT! 👋")


async def display_dashboard(ctx):
    await display_banner(ctx.wallets[0].w3)
    await display_wallet_info(ctx.wallets)


async def handle_random_transfers(ctx):
    print(f"\n{c['w']}===== RANDOM TRANSFERS =====")
    amount = ctx.console.ask_amount('Enter amount of TEA to send in each transfer: ')
    if amount is None:
        return
    count = ctx.console.ask_count('Enter number of transfers to make per wallet: ')
    if count is None:
        return

    for wallet in ctx.wallets:
        print(f"\n{c['w']}Processing transfers for Wallet {wallet.index} ({wallet.address})")
        await batch.execute_random_transfers(wallet, amount, count, ctx.console)


async def handle_staking(ctx):
    print(f"\n{c['w']}===== STAKING =====")
    amount = ctx.console.ask_amount('Enter amount of TEA to stake: ')
    if amount is None:
        return

    for wallet in ctx.wallets:
        print(f"\n{c['w']}Staking for Wallet {wallet.index} ({wallet.address})")
        await operations.stake(wallet, amount, ctx.console)


async def handle_claiming(ctx):
    print(f"\n{c['w']}===== CLAIMING =====")
    for wallet in ctx.wallets:
        print(f"\n{c['w']}Claiming for Wallet {wallet.index} ({wallet.address})")
        await operations.claim_rewards(wallet, ctx.console)


async def handle_withdrawing(ctx):
    print(f"\n{c['w']}===== WITHDRAWING =====")
    amount = ctx.console.ask_amount('Enter amount of stTEA to withdraw: ')
    if amount is None:
        return

    for wallet in ctx.wallets:
        print(f"\n{c['w']}Withdrawing for Wallet {wallet.index} ({wallet.address})")
        await operations.withdraw(wallet, amount, ctx.console)


async def handle_daily_task(ctx):
    print(f"\n{c['w']}===== DAILY TASK =====")
    for wallet in ctx.wallets:
        print(f"\n{c['w']}Executing daily task for Wallet {wallet.index} ({wallet.address})")
        await batch.execute_daily_task(wallet, ctx.console)


HANDLERS = {
    '1': handle_random_transfers,
    '2': handle_staking,
    '3': handle_claiming,
    '4': handle_withdrawing,
    '5': handle_daily_task,
}


async def run_menu(ctx):
    """Main menu loop. Returns the process exit code."""
    try:
        while True:
            show_menu()
            choice = ctx.console.ask(f"\n{c['y']}Choose an option (1-6): ").strip()

            if choice == '6':
                print(f"\n{c['w']}===== EXITING =====")
                farewell()
                print(f"{c['w']}====================")
                return 0

            handler = HANDLERS.get(choice)
            if handler is None:
                print(f"{c['R']}Invalid option. Please try again. ⚠️")
                continue

            await handler(ctx)

            ctx.console.pause()
            ctx.console.clear()
            await display_dashboard(ctx)
    except InputClosed:
        farewell()
        return 0
