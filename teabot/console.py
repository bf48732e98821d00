import os
import sys
import asyncio
from decimal import Decimal, InvalidOperation

from colorama import Fore, Style, init

init(autoreset=True)

# Color definitions
c = {
    'r': Style.RESET_ALL,
    'c': Fore.CYAN,
    'g': Fore.GREEN,
    'y': Fore.YELLOW,
    'R': Fore.RED,
    'B': Style.BRIGHT,
    'D': Style.DIM,
    'w': Fore.WHITE
}

SPINNER_FRAMES = ['⠋', '⠙', '⠹', '⠸', '⠼', '⠴', '⠦', '⠧', '⠇', '⠏']
MAX_PROMPT_ATTEMPTS = 5
# wei precision
MAX_DECIMALS = 18


class InputClosed(Exception):
    """Raised when the operator's input stream reaches end of file"""


def cls():
    """Clear terminal screen"""
    os.system('cls' if os.name == 'nt' else 'clear')


def short_address(address):
    return f"{address[:6]}...{address[-4:]}"


def format_amount(amount):
    """Plain decimal notation, never scientific"""
    return f"{Decimal(str(amount)):f}"


class Console:
    """Operator input reader shared by every menu handler.

    ``reader`` defaults to :func:`input`; tests hand in a scripted one.
    """

    def __init__(self, reader=input, clear=cls):
        self.reader = reader
        self.clear = clear

    def ask(self, prompt):
        try:
            return self.reader(prompt)
        except EOFError:
            raise InputClosed()

    def confirm(self, details):
        """Render a transaction preview and wait for y/n"""
        print(f"{c['w']}┌─── Transaction Preview ───┐")
        for key, value in details.items():
            print(f"{c['w']}│ {key:<10} : {c['c']}{value}")
        print(f"{c['w']}└──────────────────────────┘")
        answer = self.ask(f"{c['y']}Confirm transaction? (y/n): ").strip().lower()
        return answer in ('y', 'yes')

    def ask_amount(self, prompt):
        """Ask for a positive decimal amount. Returns None after too many bad answers."""
        for _ in range(MAX_PROMPT_ATTEMPTS):
            text = self.ask(f"{c['y']}{prompt}").strip()
            try:
                amount = Decimal(text)
            except InvalidOperation:
                amount = None
            if (amount is not None and amount.is_finite() and amount > 0
                    and amount.as_tuple().exponent >= -MAX_DECIMALS):
                return amount
            print(f"{c['R']}Invalid amount. Please enter a positive number with at most 18 decimals. ⚠️")
        print(f"{c['R']}Too many invalid attempts, returning to the main menu.")
        return None

    def ask_count(self, prompt):
        """Ask for a positive integer. Returns None after too many bad answers."""
        for _ in range(MAX_PROMPT_ATTEMPTS):
            text = self.ask(f"{c['y']}{prompt}").strip()
            try:
                count = int(text) if text.isdecimal() else None
            except ValueError:
                count = None
            if count is not None and count > 0:
                return count
            print(f"{c['R']}Invalid count. Please enter a positive integer. ⚠️")
        print(f"{c['R']}Too many invalid attempts, returning to the main menu.")
        return None

    def pause(self):
        self.ask(f"\n{c['y']}Press Enter to return to the main menu...")


class Spinner:
    """Spinner shown while a coroutine is pending"""

    def __init__(self, message):
        self.message = message
        self.task = None

    async def _spin(self):
        idx = 0
        try:
            while True:
                frame = SPINNER_FRAMES[idx % len(SPINNER_FRAMES)]
                sys.stdout.write(f"\r{c['y']}{self.message} {frame}{c['r']}")
                sys.stdout.flush()
                idx += 1
                await asyncio.sleep(0.1)
        except asyncio.CancelledError:
            sys.stdout.write('\r' + ' ' * (len(self.message) + 2) + '\r')
            sys.stdout.flush()
            raise

    async def __aenter__(self):
        self.task = asyncio.create_task(self._spin())
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.task.cancel()
        try:
            await self.task
        except asyncio.CancelledError:
            pass
        return False
