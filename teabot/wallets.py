import logging

import aiohttp
from eth_account import Account
from web3 import AsyncHTTPProvider, AsyncWeb3, Web3

from teabot.config import (
    NETWORK, RPC_TIMEOUT, STTEA_ABI, STTEA_CONTRACT_ADDRESS, USER_AGENT, parse_proxy
)
from teabot.console import c


class WalletEntry:
    """One signing account bound to its own RPC connection"""

    def __init__(self, index, account, w3, proxy=None, proxy_label=None):
        self.index = index
        self.account = account
        self.w3 = w3
        self.proxy = proxy
        self.proxy_label = proxy_label

    @property
    def address(self):
        return self.account.address


def make_web3(proxy=None):
    """Create an AsyncWeb3 connection, optionally routed through a proxy"""
    request_kwargs = {'timeout': aiohttp.ClientTimeout(total=RPC_TIMEOUT)}
    if proxy:
        request_kwargs['proxy'] = proxy
        request_kwargs['headers'] = {'User-Agent': USER_AGENT}
    return AsyncWeb3(AsyncHTTPProvider(NETWORK['rpc'], request_kwargs=request_kwargs))


def build_registry(private_keys, proxies=None, web3_factory=make_web3):
    """Build one WalletEntry per valid key, pairing proxies by position"""
    wallets = []
    for i, private_key in enumerate(private_keys):
        raw_proxy = proxies[i] if proxies and i < len(proxies) else None
        proxy = parse_proxy(raw_proxy)

        try:
            account = Account.from_key(private_key)
        except Exception as e:
            logging.warning(f"Invalid private key for PRIVATE_KEY{i + 1}: {e}")
            print(f"{c['R']}Invalid private key for PRIVATE_KEY{i + 1}: {e} 🚫")
            continue

        wallets.append(WalletEntry(i + 1, account, web3_factory(proxy), proxy, raw_proxy))
    return wallets


async def display_banner(w3):
    """Display banner with current block and gas price"""
    try:
        block_number = await w3.eth.block_number
        gas_price = await w3.eth.gas_price
        gas_gwei = Web3.from_wei(gas_price, 'gwei')
        status = f"        Block: {block_number} | Gas: {gas_gwei:.2f} Gwei"
    except Exception as e:
        print(f"{c['R']}Error fetching network status: {e} ❌")
        logging.error(f"Error fetching network status: {e}")
        status = "     Network status unavailable"

    print(f"{c['w']}===============================================")
    print(f"{c['B']}{c['c']}                TEA SEPOLIA AUTO BOT")
    print(f"{c['y']}          {NETWORK['name']}")
    print(f"{c['y']}{status}")
    print(f"{c['w']}===============================================")


async def display_wallet_info(wallets):
    """Display balances and proxy for every wallet"""
    for wallet in wallets:
        w3 = wallet.w3
        try:
            balance = Web3.from_wei(await w3.eth.get_balance(wallet.address), 'ether')
        except Exception as e:
            logging.error(f"Error fetching balance for {wallet.address}: {e}")
            balance = 'unavailable'

        try:
            contract = w3.eth.contract(address=Web3.to_checksum_address(STTEA_CONTRACT_ADDRESS), abi=STTEA_ABI)
            st_balance = Web3.from_wei(await contract.functions.balanceOf(wallet.address).call(), 'ether')
        except Exception:
            st_balance = 0

        print(f"\n{c['w']}===== WALLET {wallet.index} INFORMATION =====")
        print(f"{c['w']}Your address: {c['c']}{wallet.address} 👤")
        print(f"{c['w']}TEA Balance: {c['c']}{balance} {NETWORK['symbol']}")
        print(f"{c['w']}stTEA Balance: {c['c']}{st_balance} stTEA")
        print(f"{c['w']}Using proxy: {c['c']}{wallet.proxy_label or 'None'} 🌐")
        print(f"{c['w']}=============================")
