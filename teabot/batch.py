import asyncio
import logging
from decimal import Decimal

from teabot import operations
from teabot.config import DAILY_AMOUNT, DAILY_TRANSFERS, GAS_TRANSFER, TRANSFER_DELAY
from teabot.console import c, format_amount
from teabot.operations import CANCELLED, FAILED, SUCCESS


class BatchResult:
    def __init__(self, status, total, results=None, reason=None):
        self.status = status
        self.total = total
        self.results = results or []
        self.reason = reason

    @property
    def succeeded(self):
        return len(self.results)


async def execute_random_transfers(wallet, amount, count, console, action='Batch Transfer',
                                   sleep=asyncio.sleep):
    """Confirm once, then send `count` transfers of `amount` TEA to random addresses"""
    title = action.upper()
    print(f"\n{c['w']}===== {title} =====")
    print(f"{c['y']}Preparing {count} random transfers of {format_amount(amount)} TEA each... 🚀")

    try:
        operations.to_wei(amount)
        gas_cost = await operations.estimate_fee(wallet, GAS_TRANSFER, count)
    except Exception as e:
        print(f"{c['R']}Error preparing transfers: {e} ❌")
        logging.error(f"Error preparing {action.lower()} for {wallet.address}: {e}")
        print(f"{c['w']}===== {title} FAILED =====\n")
        return BatchResult(FAILED, count, reason=str(e))

    total_amount = Decimal(str(amount)) * count
    if not console.confirm({
        'Action': action,
        'Total Amount': f"{total_amount:.4f} TEA",
        'Transfers': count,
        'Est. Gas': f"{gas_cost} TEA",
    }):
        print(f"{c['R']}Transaction canceled. 🚫")
        print(f"{c['w']}===== {title} CANCELED =====\n")
        return BatchResult(CANCELLED, count)

    print(f"{c['y']}Starting {count} transfers...\n")

    results = []
    for i in range(count):
        print(f"\n{c['w']}Transfer {i + 1}/{count}")
        outcome = await operations.send_to_random_address(wallet, amount, console, skip_confirmation=True)
        if outcome.ok:
            results.append(outcome)

        if i < count - 1:
            await sleep(TRANSFER_DELAY)

    print(f"\n{c['g']}Completed {len(results)}/{count} transfers successfully. 🎉")
    print(f"{c['w']}===== {title} COMPLETED =====\n")
    logging.info(f"Wallet {wallet.address}: {action} {len(results)}/{count} transfers succeeded")
    return BatchResult(SUCCESS, count, results)


async def execute_daily_task(wallet, console, sleep=asyncio.sleep):
    """100 transfers of 0.0001 TEA"""
    return await execute_random_transfers(
        wallet, Decimal(DAILY_AMOUNT), DAILY_TRANSFERS, console, action='Daily Task', sleep=sleep
    )
