# gocoin

A small proof-of-work blockchain. Blocks are mined against a difficulty target and stored in a local SQLite file. The chain is served as JSON over HTTP. Transactions follow the unspent-output (UTXO) model, and pending transactions wait in an in-memory mempool.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## Running the server

```
gocoin -mode rest -port 4000
```

The options are:

- `-port` / `--port`: the port the server listens on (default `4000`).
- `-mode` / `--mode`: the server mode (default `rest`, which is the only mode).

If you run `gocoin` with no arguments, or with any mode other than `rest`, it prints a short usage message and exits with status 1.

The chain is stored in `blockchain.db` in the current directory. If that file has no checkpoint yet, the genesis block is mined on first start. The server listens on all interfaces and handles one request at a time.

### Endpoints

Every response has the content type `application/json`.

| Method     | Path             | Description                                                       |
|------------|------------------|-------------------------------------------------------------------|
| GET        | `/`              | Documentation of the API, with URLs on `localhost` and the port   |
| any        | `/status`        | `newestHash`, `height` and `currentDifficulty` of the chain       |
| GET        | `/blocks`        | All blocks, newest first                                          |
| POST       | `/blocks`        | Mine a new block; answers `201` with an empty body                |
| GET        | `/blocks/{hash}` | One block, or `{"errorMessage": "block not found"}`               |
| any        | `/mempool`       | Transactions waiting to be confirmed                              |

`POST /blocks` needs a JSON request body. Its content is ignored, but a body that is not valid JSON gets a `400` answer with an `errorMessage`. `/blocks/{hash}` only accepts lowercase hex hashes; any other path answers `404`.

## Using it as a library

```python
from gocoin.db import Database
from gocoin.blockchain import Blockchain, Mempool

with Database("chain.db") as db:
    chain = Blockchain.load(db, Mempool())
    chain.add_block()
    for block in chain.blocks():
        print(block.height, block.hash)
    print(chain.balance_by_address("Address"))
```

The modules are:

- `gocoin.db`: `Database`, a key-value store with `save_block`, `block`, `save_checkpoint`, `checkpoint` and `close`. It can be used as a context manager.
- `gocoin.blockchain`: `Block`, `Tx`, `TxIn`, `TxOut`, `UTxOut`, `Mempool` and `Blockchain`, and the functions `find_block`, `create_block` and `make_coinbase_tx`.
- `gocoin.rest`: `create_app(chain, port)` builds the Flask application, and `start(port, chain)` serves it.
- `gocoin.cli`: `main(argv)`, the `gocoin` command.
- `gocoin.utils`: `to_bytes`, `from_bytes` and `hash_value`, which handle canonical JSON encoding and SHA-256 hashing.

### Mining and difficulty

- Difficulty starts at 2 leading zeros in the hex hash.
- It is recalculated every 5 blocks, aiming for one block every 2 minutes, with 2 minutes of tolerance either way.
- A block's hash is the SHA-256 of its canonical JSON form.

### Transactions

`Blockchain.make_tx(sender, recipient, amount)` builds a transfer. It spends the sender's unspent outputs and adds a change output when the amount does not match exactly. `Blockchain.add_tx(to, amount)` sends from the address `"address"` and queues the transaction in the mempool. `Blockchain.tx_to_confirm()` drains the mempool and appends a coinbase transaction of 50 to `"Address"`.

Errors:

- `make_tx` and `add_tx` raise `NotEnoughMoneyError` when the balance is too low.
- `find_block` raises `NotFoundError` for an unknown hash.

## What it does not do

- There is no HTML block explorer. `rest` is the only server mode.
- The HTTP API has no endpoints for submitting transactions or for querying balances and unspent outputs. These are only available through the `Blockchain` methods.
- `Blockchain.add_block` mines blocks with no transactions. It does not take transactions from the mempool.
- The mempool is not persisted, so it is lost when the process exits.

## Running the tests

```
pytest
```