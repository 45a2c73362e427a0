"""Blocks, transactions, the mempool and the chain itself."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any

from gocoin.db import Database
from gocoin.utils import from_bytes, hash_value, to_bytes

DEFAULT_DIFFICULTY = 2
DIFFICULTY_INTERVAL = 5
BLOCK_INTERVAL = 2
ALLOWED_RANGE = 2
MINER_REWARD = 50


class NotFoundError(LookupError):
    """Raised when a block is not in the store."""

    def __init__(self, message: str = "block not found") -> None:
        super().__init__(message)


class NotEnoughMoneyError(ValueError):
    """Raised when a sender's balance does not cover a transfer."""

    def __init__(self, message: str = "Not Enough Money") -> None:
        super().__init__(message)


@dataclass
class TxIn:
    tx_id: str
    index: int
    owner: str

    def to_dict(self) -> dict[str, Any]:
        return {"txId": self.tx_id, "index": self.index, "owner": self.owner}


@dataclass
class TxOut:
    owner: str
    amount: int

    def to_dict(self) -> dict[str, Any]:
        return {"owner": self.owner, "amount": self.amount}


@dataclass
class UTxOut:
    tx_id: str
    index: int
    amount: int

    def to_dict(self) -> dict[str, Any]:
        return {"TxId": self.tx_id, "Index": self.index, "Amount": self.amount}


@dataclass
class Tx:
    id: str = ""
    timestamp: int = 0
    tx_ins: list[TxIn] = field(default_factory=list)
    tx_outs: list[TxOut] = field(default_factory=list)

    def compute_id(self) -> None:
        """Set the id to the hash of the transaction's contents."""
        self.id = hash_value(self.to_dict())

    def to_dict(self) -> dict[str, Any]:
        return {
            "ID": self.id,
            "Timestamp": self.timestamp,
            "TxIns": [tx_in.to_dict() for tx_in in self.tx_ins],
            "TxOuts": [tx_out.to_dict() for tx_out in self.tx_outs],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Tx":
        return cls(
            id=data.get("ID", ""),
            timestamp=data.get("Timestamp", 0),
            tx_ins=[
                TxIn(item["txId"], item["index"], item["owner"])
                for item in data.get("TxIns") or []
            ],
            tx_outs=[
                TxOut(item["owner"], item["amount"])
                for item in data.get("TxOuts") or []
            ],
        )


@dataclass
class Block:
    data: str = ""
    hash: str = ""
    prev_hash: str = ""
    height: int = 0
    difficulty: int = 0
    nonce: int = 0
    timestamp: int = 0
    transactions: list[Tx] = field(default_factory=list)

    def mine(self) -> None:
        """Increase the nonce until the hash starts with enough zeros."""
        target = "0" * self.difficulty
        while True:
            self.timestamp = int(time.time())
            digest = hash_value(self.to_dict())
            if digest.startswith(target):
                self.hash = digest
                return
            self.nonce += 1

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"data": self.data, "hash": self.hash}
        if self.prev_hash:
            result["prevHash"] = self.prev_hash
        result.update(
            height=self.height,
            difficulty=self.difficulty,
            nonce=self.nonce,
            timestamp=self.timestamp,
            transactions=[tx.to_dict() for tx in self.transactions],
        )
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Block":
        return cls(
            data=data.get("data", ""),
            hash=data.get("hash", ""),
            prev_hash=data.get("prevHash", ""),
            height=data.get("height", 0),
            difficulty=data.get("difficulty", 0),
            nonce=data.get("nonce", 0),
            timestamp=data.get("timestamp", 0),
            transactions=[Tx.from_dict(tx) for tx in data.get("transactions") or []],
        )


def _persist_block(db: Database, block: Block) -> None:
    db.save_block(block.hash, to_bytes(block.to_dict()))


def find_block(db: Database, block_hash: str) -> Block:
    """Load a block by hash, raising NotFoundError if it is absent."""
    data = db.block(block_hash)
    if data is None:
        raise NotFoundError()
    return Block.from_dict(from_bytes(data))


def create_block(db: Database, prev_hash: str, height: int, difficulty: int) -> Block:
    """Mine a new block on top of ``prev_hash`` and store it."""
    block = Block(prev_hash=prev_hash, height=height, difficulty=difficulty)
    block.mine()
    _persist_block(db, block)
    return block


def make_coinbase_tx(address: str) -> Tx:
    """Build the reward transaction paying the miner."""
    tx = Tx(
        timestamp=int(time.time()),
        tx_ins=[TxIn("", -1, "COINBASE")],
        tx_outs=[TxOut(address, MINER_REWARD)],
    )
    tx.compute_id()
    return tx


@dataclass
class Mempool:
    """Transactions waiting to be confirmed; kept in memory only."""

    txs: list[Tx] = field(default_factory=list)

    def is_on_mempool(self, utxout: UTxOut) -> bool:
        """Tell whether a pending transaction already spends this output."""
        return any(
            tx_in.tx_id == utxout.tx_id and tx_in.index == utxout.index
            for tx in self.txs
            for tx_in in tx.tx_ins
        )


class Blockchain:
    """The chain state: newest hash, height and current difficulty."""

    def __init__(self, db: Database, mempool: Mempool | None = None) -> None:
        self.db = db
        self.mempool = mempool if mempool is not None else Mempool()
        self.newest_hash = ""
        self.height = 0
        self.current_difficulty = 0

    @classmethod
    def load(cls, db: Database, mempool: Mempool | None = None) -> "Blockchain":
        """Restore the chain from its checkpoint, or mine the genesis block."""
        chain = cls(db, mempool)
        checkpoint = db.checkpoint()
        if checkpoint is None:
            chain.add_block()
        else:
            state = from_bytes(checkpoint)
            chain.newest_hash = state["newestHash"]
            chain.height = state["height"]
            chain.current_difficulty = state["currentDifficulty"]
        return chain

    def _persist(self) -> None:
        self.db.save_checkpoint(to_bytes(self.to_dict()))

    def add_block(self) -> Block:
        """Mine a block on top of the chain and save the new state."""
        block = create_block(self.db, self.newest_hash, self.height + 1, self.difficulty())
        self.newest_hash = block.hash
        self.height = block.height
        self.current_difficulty = block.difficulty
        self._persist()
        return block

    def blocks(self) -> list[Block]:
        """Return every block, newest first."""
        result: list[Block] = []
        cursor = self.newest_hash
        while cursor:
            block = find_block(self.db, cursor)
            result.append(block)
            cursor = block.prev_hash
        return result

    def tx_outs(self) -> list[TxOut]:
        """Return every transaction output in the chain."""
        return [
            tx_out
            for block in self.blocks()
            for tx in block.transactions
            for tx_out in tx.tx_outs
        ]

    def difficulty(self) -> int:
        """Return the difficulty the next block must be mined at."""
        if self.height == 0:
            return DEFAULT_DIFFICULTY
        if self.height % DIFFICULTY_INTERVAL == 0:
            return self.recalculate_difficulty()
        return self.current_difficulty

    def recalculate_difficulty(self) -> int:
        """Adjust difficulty by how long the last interval of blocks took."""
        all_blocks = self.blocks()
        newest = all_blocks[0]
        last_recalculated = all_blocks[DIFFICULTY_INTERVAL - 1]
        actual_time = int((newest.timestamp - last_recalculated.timestamp) / 60)
        expected_time = DIFFICULTY_INTERVAL * BLOCK_INTERVAL
        if actual_time < expected_time - ALLOWED_RANGE:
            return self.current_difficulty + 1
        if actual_time > expected_time + ALLOWED_RANGE:
            return self.current_difficulty - 1
        return self.current_difficulty

    def utxouts_by_address(self, address: str) -> list[UTxOut]:
        """Return outputs owned by ``address`` that are unspent and not pending."""
        result: list[UTxOut] = []
        creator_txs: set[str] = set()
        for block in self.blocks():
            for tx in block.transactions:
                creator_txs.update(
                    tx_in.tx_id for tx_in in tx.tx_ins if tx_in.owner == address
                )
                for index, output in enumerate(tx.tx_outs):
                    if output.owner != address or tx.id in creator_txs:
                        continue
                    utxout = UTxOut(tx.id, index, output.amount)
                    if not self.mempool.is_on_mempool(utxout):
                        result.append(utxout)
        return result

    def balance_by_address(self, address: str) -> int:
        """Sum the spendable outputs of ``address``."""
        return sum(utxout.amount for utxout in self.utxouts_by_address(address))

    def make_tx(self, sender: str, recipient: str, amount: int) -> Tx:
        """Build a transfer, raising NotEnoughMoneyError if funds fall short."""
        if self.balance_by_address(sender) < amount:
            raise NotEnoughMoneyError()
        tx_ins: list[TxIn] = []
        total = 0
        for utxout in self.utxouts_by_address(sender):
            if total >= amount:
                break
            tx_ins.append(TxIn(utxout.tx_id, utxout.index, sender))
            total += utxout.amount
        tx_outs: list[TxOut] = []
        change = total - amount
        if change != 0:
            tx_outs.append(TxOut(sender, change))
        tx_outs.append(TxOut(recipient, amount))
        tx = Tx(timestamp=int(time.time()), tx_ins=tx_ins, tx_outs=tx_outs)
        tx.compute_id()
        return tx

    def add_tx(self, to: str, amount: int) -> Tx:
        """Queue a transfer from the node's address into the mempool."""
        tx = self.make_tx("address", to, amount)
        self.mempool.txs.append(tx)
        return tx

    def tx_to_confirm(self) -> list[Tx]:
        """Drain the mempool, appending the miner's coinbase transaction."""
        txs = [*self.mempool.txs, make_coinbase_tx("Address")]
        self.mempool.txs = []
        return txs

    def to_dict(self) -> dict[str, Any]:
        return {
            "newestHash": self.newest_hash,
            "height": self.height,
            "currentDifficulty": self.current_difficulty,
        }