# polybor

Chain specification and proof-of-authority consensus rules for the Polygon
PoS (Bor) network, as a plain Python library.

It covers:

- **Hardforks** (`polybor.hardfork`): the ten Bor hardforks (Delhi through
  Lisovo) with their mainnet (chain 137) and Amoy testnet (chain 80002)
  activation blocks, and case-insensitive parsing of their names.
- **Fork-dependent parameters** (`polybor.params`): sprint size, span size,
  block gas limit, base fee change denominator and maximum code size at any
  block height.
- **Chain specification** (`polybor.chainspec`): an Ethereum-style chain spec
  with Bor hardforks added on top, EIP-2124 fork IDs and fork filters that, as
  on the live network, include only the Ethereum forks.
- **Header sealing** (`polybor.seal`, `polybor.ecdsa`): the seal hash of a
  header (its RLP encoding with the 65-byte signature removed from extra data)
  and recovery of the signer with secp256k1 ECDSA.
- **Extra data** (`polybor.extra_data`): splitting header extra data into
  vanity, validator list and seal.
- **Consensus checks** (`polybor.difficulty`, `polybor.validation`,
  `polybor.block_validation`, `polybor.recents`): in-turn / out-of-turn
  difficulty, header and block validation, and the window that stops a
  validator signing twice in quick succession.
- **Proposer selection and snapshots** (`polybor.proposer`,
  `polybor.snapshot`): weighted round-robin proposer selection and a
  JSON-serialisable snapshot of the validator set and recent signers.

The only runtime dependency is `pycryptodome`, used for Keccak-256. The
`test` extra adds `pytest`.

## Hardforks and parameters

```python
from polybor.hardfork import BorHardfork
from polybor.params import sprint_size, span_size, block_gas_limit, is_sprint_start

delhi = BorHardfork.parse("DELHI")
print(delhi.mainnet_block())        # 38189056
print(delhi.amoy_block())           # 73100
print(len(BorHardfork.all()))       # 10

print(sprint_size(38_189_055))      # 64  (before Delhi)
print(sprint_size(38_189_056))      # 16  (from Delhi on)
print(span_size(77_414_656))        # 1600 (from Rio on)
print(block_gas_limit(76_000_000))  # 45000000 (from Bhilai on)
print(is_sprint_start(64))          # True
```

An unknown hardfork name raises `ValueError`.

## Chain specification

```python
from polybor.chainspec import bor_mainnet_genesis, Head
from polybor.hardfork import BorHardfork

spec = bor_mainnet_genesis()
print(spec.is_bor_fork_active_at_block(BorHardfork.Lisovo, 83_756_500))  # True
print(spec.is_bor_fork_active_at_block(BorHardfork.Lisovo, 83_756_499))  # False

fork_id = spec.fork_id(Head(number=0))
print(fork_id.next)                 # 29231616, the London block
```

Bor hardforks must be given in ascending activation order; building a
`BorChainSpec` whose forks go backwards raises `ValueError`.

## Extra data and difficulty

```python
from polybor.extra_data import ExtraData
from polybor.difficulty import calculate_difficulty

extra = ExtraData.parse(header_extra_bytes)   # vanity + N*20 validator bytes + seal
validators = extra.validators()

difficulty = calculate_difficulty(validators[0], validators, block_number)
```

Extra data shorter than 97 bytes raises `ExtraDataTooShort`; validator bytes
whose length is not a multiple of 20 raise `InvalidValidatorBytes`. Both are
subclasses of `ExtraDataError`.

## Validation

`validate_header` checks nonce, mix hash, ommers, extra data, timestamp drift,
the seal signature, signer authorisation, the recent-signer window and the
difficulty, and returns the recovered signer. Each failure raises a specific
subclass of `ValidationError` (for example `NonZeroNonce`, `FutureBlock`,
`UnauthorizedSigner`, `WrongDifficulty`), so callers can catch the whole
family or a single case.

`validate_block_pre_execution` and `validate_block_post_execution` cover the
block-level rules: no ommers or withdrawals, validators present at span
starts, and matching state root, receipt root and gas used after execution.