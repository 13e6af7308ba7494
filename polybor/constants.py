"""Bor chain constants, well-known addresses and bootnode records."""

_ADDRESS_LEN = 20


def _address(value: int) -> bytes:
    return value.to_bytes(_ADDRESS_LEN, "big")


SYSTEM_ADDRESS: bytes = _address(2**160 - 2)
"""Address that sends system transactions."""

BOR_VALIDATOR_SET_ADDRESS: bytes = _address(0x1000)
"""Validator set contract on the Bor chain."""

STATE_RECEIVER_ADDRESS: bytes = _address(0x1001)
"""State receiver contract on the Bor chain."""

MAINNET_CHAIN_ID = 137
AMOY_CHAIN_ID = 80002

SPRINT_SIZE = 16
"""Default number of blocks per sprint."""

BLOCK_PERIOD = 2
"""Default block period in seconds."""

EXTRADATA_VANITY_LEN = 32
"""Length of the vanity prefix of header extra data, in bytes."""

EXTRADATA_SEAL_LEN = 65
"""Length of the signature suffix of header extra data, in bytes."""

STATE_SYNC_DELAY = 128
"""State sync delay in seconds, from Indore on."""

VALIDATOR_PRODUCER_TIMEOUT = 8
"""Validator/producer timeout in seconds."""

_P2P_PORT = 30303


def _enode(node_id: str, host: str, port: int = _P2P_PORT) -> str:
    return f"enode://{node_id}@{host}:{port}"


_AMOY_NODES = (
    (
        "d40ab6b340be9f78179bd1ec7aa4df346d43dc1462d85fb44c5d43f595991d2e"
        "c215d7c778a7588906cb4edf175b3df231cecce090986a739678cd3c620bf580",
        "34.89.255.109",
    ),
    (
        "13abba15caa024325f2209d3566fa77cd864281dda4f73bca4296277bfd919ac"
        "68cef4dbb508028e0310a24f6f9e23c761fa41ac735cdc87efdee76d5ff985a7",
        "34.185.137.160",
    ),
    (
        "fc5bd3856a4ce6389eef1d6bc637ce7617e6ba8013f7d722d9878cf13f1c5a5a"
        "95a9e26ccb0b38bcc330343941ce117ab50db9f61e72ba450dd528a1184d8e6a",
        "34.89.119.250",
    ),
    (
        "945e11d11bdeed301fb23a5c05aae77bfdde39a8f70308131682a5d2fc1f0805"
        "31314554afc78718a72ae25cc09be7833f760bf8681516b4315ed36217fa8dab",
        "34.89.40.235",
    ),
)

AMOY_BOOTNODES: tuple[str, ...] = tuple(_enode(node_id, host) for node_id, host in _AMOY_NODES)
"""Amoy testnet bootnodes as enode URLs."""

AMOY_DNS_DISCOVERY = "enrtree://[email]"
"""Amoy testnet DNS discovery tree."""

MAINNET_BOOTNODES: tuple[str, ...] = ()
"""Polygon PoS mainnet bootnodes."""