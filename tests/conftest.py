import pytest
from eth_account import Account

from teabot.console import Console
from teabot.wallets import WalletEntry


async def _value(value):
    if isinstance(value, Exception):
        raise value
    return value


class FakeFunction:
    def __init__(self, eth, address, name, args):
        self.eth = eth
        self.address = address
        self.name = name
        self.args = args

    async def build_transaction(self, params):
        self.eth.calls.append(f'build:{self.name}')
        tx = dict(params)
        tx['to'] = self.address
        tx['data'] = '0x' + self.name.encode().hex()
        self.eth.built.append((self.name, self.args, tx))
        return tx

    async def call(self):
        self.eth.calls.append(f'call:{self.name}')
        return _check(self.eth.st_balance)


def _check(value):
    if isinstance(value, Exception):
        raise value
    return value


class FakeFunctions:
    def __init__(self, eth, address):
        self.eth = eth
        self.address = address

    def __getattr__(self, name):
        return lambda *args: FakeFunction(self.eth, self.address, name, args)


class FakeContract:
    def __init__(self, eth, address):
        self.address = address
        self.functions = FakeFunctions(eth, address)


class FakeEth:
    """In-memory stand-in for AsyncWeb3().eth"""

    def __init__(self, gas_price=2_000_000_000):
        self.calls = []
        self.sent = []
        self.built = []
        self.fail_sends = set()
        self.receipt_status = 1
        self.gas_price_value = gas_price
        self.balance = 3 * 10**18
        self.st_balance = 10**18

    @property
    def gas_price(self):
        self.calls.append('gas_price')
        return _value(self.gas_price_value)

    @property
    def block_number(self):
        self.calls.append('block_number')
        return _value(1234)

    async def get_transaction_count(self, address, block_identifier):
        self.calls.append('nonce')
        return len(self.sent)

    async def get_balance(self, address):
        self.calls.append('balance')
        return _check(self.balance)

    async def send_raw_transaction(self, raw):
        self.calls.append('send')
        n = len(self.sent)
        self.sent.append(raw)
        if n in self.fail_sends:
            raise ValueError('insufficient funds for gas * price + value')
        return bytes([n + 1]) * 32

    async def wait_for_transaction_receipt(self, tx_hash):
        self.calls.append('wait')
        return {'blockNumber': 500 + len(self.sent), 'status': self.receipt_status, 'transactionHash': tx_hash}

    def contract(self, address, abi):
        return FakeContract(self, address)


class FakeProvider:
    def __init__(self):
        self.disconnected = 0

    async def disconnect(self):
        self.disconnected += 1


class FakeWeb3:
    def __init__(self):
        self.eth = FakeEth()
        self.provider = FakeProvider()


class RecordingAccount:
    """Real local account that remembers what it signed"""

    def __init__(self):
        self.inner = Account.create()
        self.signed = []

    @property
    def address(self):
        return self.inner.address

    def sign_transaction(self, tx):
        self.signed.append(dict(tx))
        return self.inner.sign_transaction(tx)


class ScriptedReader:
    def __init__(self, answers):
        self.answers = list(answers)
        self.prompts = []

    def __call__(self, prompt=''):
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError()
        return self.answers.pop(0)


def make_console(*answers):
    reader = ScriptedReader(answers)
    return Console(reader=reader, clear=lambda: None), reader


def make_wallet(index=1):
    return WalletEntry(index, RecordingAccount(), FakeWeb3())


@pytest.fixture
def wallet():
    return make_wallet()
