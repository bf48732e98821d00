import os
import logging

from dotenv import load_dotenv

# Network descriptor
NETWORK = {
    'name': 'Tea Sepolia Testnet 🌐',
    'rpc': 'https://tea-sepolia.g.alchemy.com/public',
    'chain_id': 10218,
    'symbol': 'TEA',
    'explorer': 'https://sepolia.tea.xyz/',
}

STTEA_CONTRACT_ADDRESS = '0x04290DACdb061C6C9A0B9735556744be49A64012'

STTEA_ABI = [
    {"type": "function", "name": "stake", "stateMutability": "payable", "inputs": [], "outputs": []},
    {"type": "function", "name": "balanceOf", "stateMutability": "view",
     "inputs": [{"name": "owner", "type": "address"}], "outputs": [{"name": "", "type": "uint256"}]},
    {"type": "function", "name": "withdraw", "stateMutability": "nonpayable",
     "inputs": [{"name": "_amount", "type": "uint256"}], "outputs": []},
]

# getReward()
CLAIM_REWARDS_DATA = '0x3d18b912'

# Fixed gas units per operation
GAS_STAKE = 200_000
GAS_WITHDRAW = 100_000
GAS_CLAIM = 100_000
GAS_TRANSFER = 21_000

TRANSFER_DELAY = 2
DAILY_AMOUNT = '0.0001'
DAILY_TRANSFERS = 100

ENV_FILE = '.env'
PROXY_FILE = 'proxies.txt'
LOG_FILE = 'tea_bot.log'
RPC_TIMEOUT = 60
USER_AGENT = 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36'


def setup_logging(log_file=LOG_FILE):
    """Setup logging to file and console"""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler()
        ]
    )


def load_private_keys(environ=None, env_file=ENV_FILE):
    """Collect PRIVATE_KEY1, PRIVATE_KEY2, ... until the first gap"""
    if environ is None:
        load_dotenv(env_file)
        environ = os.environ

    keys = []
    i = 1
    while environ.get(f'PRIVATE_KEY{i}'):
        keys.append(environ[f'PRIVATE_KEY{i}'].strip())
        i += 1
    return keys


def load_proxies(filename=PROXY_FILE):
    """Load proxies from file, one per line. Returns None when there are none."""
    if not os.path.exists(filename):
        logging.warning(f"Proxy file {filename} not found, running without proxy")
        return None

    try:
        with open(filename, 'r') as f:
            proxies = [line.strip() for line in f.read().splitlines() if line.strip()]
    except OSError as e:
        logging.error(f"Error reading {filename}: {e}")
        return None

    if not proxies:
        logging.warning(f"No proxies found in {filename}, running without proxy")
        return None
    return proxies


def parse_proxy(proxy):
    if not proxy:
        return None
    if proxy.startswith('http://') or proxy.startswith('https://'):
        return proxy
    return f"http://{proxy}"


def explorer_tx_url(tx_hash):
    return f"{NETWORK['explorer'].rstrip('/')}/tx/{tx_hash}"
