import logging
from decimal import Decimal

from eth_account import Account
from web3 import Web3

from teabot.config import (
    CLAIM_REWARDS_DATA, GAS_CLAIM, GAS_STAKE, GAS_TRANSFER, GAS_WITHDRAW,
    NETWORK, STTEA_ABI, STTEA_CONTRACT_ADDRESS, explorer_tx_url
)
from teabot.console import Spinner, c, format_amount, short_address

SUCCESS = 'success'
CANCELLED = 'cancelled'
FAILED = 'failed'


class TransactionReverted(Exception):
    pass


class TxOutcome:
    """Result of one submitted (or abandoned) transaction"""

    def __init__(self, status, reason=None, tx_hash=None, receipt=None, to_address=None):
        self.status = status
        self.reason = reason
        self.tx_hash = tx_hash
        self.receipt = receipt
        self.to_address = to_address

    @classmethod
    def success(cls, tx_hash, receipt, to_address=None):
        return cls(SUCCESS, tx_hash=tx_hash, receipt=receipt, to_address=to_address)

    @classmethod
    def cancelled(cls):
        return cls(CANCELLED, reason='canceled by operator')

    @classmethod
    def failed(cls, reason):
        return cls(FAILED, reason=reason)

    @property
    def ok(self):
        return self.status == SUCCESS

    @property
    def block_number(self):
        return self.receipt['blockNumber'] if self.receipt else None

    def __repr__(self):
        return f"TxOutcome({self.status!r}, reason={self.reason!r}, tx_hash={self.tx_hash!r})"


def to_wei(amount):
    value = Web3.to_wei(Decimal(str(amount)), 'ether')
    if value <= 0:
        raise ValueError(f"amount {format_amount(amount)} TEA is below 1 wei")
    return value


async def estimate_fee(wallet, gas, count=1):
    """Display-only fee estimate in TEA: current gas price * gas units * count"""
    gas_price = await wallet.w3.eth.gas_price
    return Web3.from_wei(gas_price * gas * count, 'ether')


def staking_contract(w3):
    return w3.eth.contract(address=Web3.to_checksum_address(STTEA_CONTRACT_ADDRESS), abi=STTEA_ABI)


async def tx_params(wallet, gas, value=0):
    """Base transaction fields with live gas price and pending nonce"""
    w3 = wallet.w3
    tx = {
        'from': wallet.address,
        'gas': gas,
        'gasPrice': await w3.eth.gas_price,
        'nonce': await w3.eth.get_transaction_count(wallet.address, 'pending'),
        'chainId': NETWORK['chain_id'],
    }
    if value:
        tx['value'] = value
    return tx


async def send_and_wait(wallet, tx):
    """Sign, broadcast and wait for the receipt"""
    signed = wallet.account.sign_transaction(tx)
    tx_hash = Web3.to_hex(await wallet.w3.eth.send_raw_transaction(signed.raw_transaction))

    print(f"{c['w']}Transaction sent! Hash: {c['c']}{tx_hash} 📤")
    print(f"{c['D']}View on explorer: {explorer_tx_url(tx_hash)} 🔗")
    logging.info(f"Wallet {wallet.address}: sent {tx_hash}")

    async with Spinner('Waiting for confirmation...'):
        receipt = await wallet.w3.eth.wait_for_transaction_receipt(tx_hash)

    if receipt.get('status') == 0:
        raise TransactionReverted(f"transaction {tx_hash} reverted in block {receipt['blockNumber']}")

    print(f"{c['g']}Transaction confirmed in block {receipt['blockNumber']} ✅")
    logging.info(f"Wallet {wallet.address}: {tx_hash} confirmed in block {receipt['blockNumber']}")
    return tx_hash, receipt


def _canceled(title):
    print(f"{c['R']}Transaction canceled. 🚫")
    if title:
        print(f"{c['w']}===== {title} CANCELED =====\n")
    return TxOutcome.cancelled()


def _failed(title, action, wallet, e):
    print(f"{c['R']}Error {action}: {e} ❌")
    logging.error(f"Error {action} for {wallet.address}: {e}")
    if title:
        print(f"{c['w']}===== {title} FAILED =====\n")
    return TxOutcome.failed(str(e))


async def stake(wallet, amount, console):
    """Stake TEA into the stTEA contract"""
    try:
        value = to_wei(amount)
        gas_cost = await estimate_fee(wallet, GAS_STAKE)
    except Exception as e:
        return _failed('STAKING', 'staking TEA', wallet, e)

    if not console.confirm({
        'Action': 'Stake',
        'Amount': f"{format_amount(amount)} TEA",
        'Est. Gas': f"{gas_cost} TEA",
    }):
        return _canceled('STAKING')

    try:
        print(f"\n{c['w']}===== STAKING TEA =====")
        print(f"{c['y']}Staking {format_amount(amount)} TEA...")
        contract = staking_contract(wallet.w3)
        tx = await contract.functions.stake().build_transaction(await tx_params(wallet, GAS_STAKE, value))
        tx_hash, receipt = await send_and_wait(wallet, tx)
    except Exception as e:
        return _failed('STAKING', 'staking TEA', wallet, e)

    print(f"{c['g']}Successfully staked {format_amount(amount)} TEA! 🎉")
    print(f"{c['w']}===== STAKING COMPLETED =====\n")
    return TxOutcome.success(tx_hash, receipt)


async def withdraw(wallet, amount, console):
    """Withdraw stTEA back to TEA"""
    try:
        value = to_wei(amount)
        gas_cost = await estimate_fee(wallet, GAS_WITHDRAW)
    except Exception as e:
        return _failed('WITHDRAW', 'withdrawing TEA', wallet, e)

    if not console.confirm({
        'Action': 'Withdraw',
        'Amount': f"{format_amount(amount)} stTEA",
        'Est. Gas': f"{gas_cost} TEA",
    }):
        return _canceled('WITHDRAW')

    try:
        print(f"\n{c['w']}===== WITHDRAWING TEA =====")
        print(f"{c['y']}Withdrawing {format_amount(amount)} stTEA...")
        contract = staking_contract(wallet.w3)
        tx = await contract.functions.withdraw(value).build_transaction(await tx_params(wallet, GAS_WITHDRAW))
        tx_hash, receipt = await send_and_wait(wallet, tx)
    except Exception as e:
        return _failed('WITHDRAW', 'withdrawing TEA', wallet, e)

    print(f"{c['g']}Successfully withdrawn {format_amount(amount)} stTEA! 🎉")
    print(f"{c['w']}===== WITHDRAW COMPLETED =====\n")
    return TxOutcome.success(tx_hash, receipt)


async def claim_rewards(wallet, console):
    """Claim stTEA rewards with a raw getReward() call"""
    print(f"\n{c['w']}===== CLAIMING REWARDS =====")
    print(f"{c['y']}Claiming stTEA rewards...")

    try:
        gas_cost = await estimate_fee(wallet, GAS_CLAIM)
    except Exception as e:
        return _failed('CLAIMING', 'claiming rewards', wallet, e)

    if not console.confirm({
        'Action': 'Claim Rewards',
        'Est. Gas': f"{gas_cost} TEA",
    }):
        return _canceled('CLAIM')

    try:
        tx = await tx_params(wallet, GAS_CLAIM)
        tx['to'] = Web3.to_checksum_address(STTEA_CONTRACT_ADDRESS)
        tx['data'] = CLAIM_REWARDS_DATA
        tx_hash, receipt = await send_and_wait(wallet, tx)
    except Exception as e:
        return _failed('CLAIMING', 'claiming rewards', wallet, e)

    print(f"{c['g']}Successfully claimed rewards! 🎉")
    print(f"{c['w']}===== CLAIMING COMPLETED =====\n")

    try:
        balance = Web3.from_wei(await wallet.w3.eth.get_balance(wallet.address), 'ether')
        print(f"{c['w']}Updated TEA Balance: {c['c']}{balance} {NETWORK['symbol']} 💰")
    except Exception as e:
        print(f"{c['R']}Error fetching updated balance: {e} ❌")
        logging.error(f"Error fetching balance for {wallet.address}: {e}")

    return TxOutcome.success(tx_hash, receipt)


def generate_random_address():
    return Account.create().address


async def send_to_random_address(wallet, amount, console, skip_confirmation=False):
    """Send TEA to a freshly generated address"""
    to_address = generate_random_address()

    try:
        value = to_wei(amount)
        gas_cost = await estimate_fee(wallet, GAS_TRANSFER)
    except Exception as e:
        return _failed(None, 'sending TEA', wallet, e)

    if not skip_confirmation and not console.confirm({
        'Action': 'Transfer',
        'Amount': f"{format_amount(amount)} TEA",
        'To': short_address(to_address),
        'Est. Gas': f"{gas_cost} TEA",
    }):
        return _canceled(None)

    try:
        print(f"{c['y']}Sending {format_amount(amount)} TEA to random address: {c['c']}{to_address} 📤")
        tx = await tx_params(wallet, GAS_TRANSFER, value)
        tx['to'] = to_address
        tx_hash, receipt = await send_and_wait(wallet, tx)
    except Exception as e:
        return _failed(None, 'sending TEA', wallet, e)

    return TxOutcome.success(tx_hash, receipt, to_address)
