import pytest

from gocoin.blockchain import Blockchain, Tx, TxIn, TxOut
from gocoin.db import Database
from gocoin.rest import create_app


@pytest.fixture
def chain(tmp_path):
    with Database(tmp_path / "chain.db") as db:
        yield Blockchain.load(db)


@pytest.fixture
def client(chain):
    return create_app(chain, 4000).test_client()


def test_documentation_lists_endpoints(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.headers["Content-Type"] == "application/json"
    docs = response.get_json()
    assert len(docs) == 5
    assert docs[0]["url"] == "http://localhost:4000/"
    assert [d["method"] for d in docs] == ["GET", "GET", "GET", "POST", "GET"]


def test_documentation_payload_only_on_post(client):
    docs = client.get("/").get_json()
    with_payload = [d for d in docs if "payload" in d]
    assert len(with_payload) == 1
    assert with_payload[0]["payload"] == "data:string"
    assert with_payload[0]["method"] == "POST"


def test_documentation_rejects_post(client):
    assert client.post("/").status_code == 405


def test_status_matches_chain(client, chain):
    data = client.get("/status").get_json()
    assert data == chain.to_dict()
    assert data["height"] == 1


def test_blocks_lists_genesis(client, chain):
    blocks = client.get("/blocks").get_json()
    assert len(blocks) == 1
    assert blocks[0]["hash"] == chain.newest_hash
    assert "prevHash" not in blocks[0]


def test_post_blocks_adds_block(client, chain):
    first_hash = chain.newest_hash
    response = client.post("/blocks", json={"Message": "hello"})
    assert response.status_code == 201
    assert chain.height == 2
    blocks = client.get("/blocks").get_json()
    assert len(blocks) == 2
    assert blocks[0]["prevHash"] == first_hash


def test_post_blocks_rejects_bad_body(client, chain):
    response = client.post("/blocks", data="not json", content_type="application/json")
    assert response.status_code == 400
    assert chain.height == 1


def test_block_by_hash(client, chain):
    data = client.get(f"/blocks/{chain.newest_hash}").get_json()
    assert data["hash"] == chain.newest_hash
    assert data["height"] == 1


def test_block_not_found(client):
    response = client.get("/blocks/abc123")
    assert response.status_code == 200
    assert response.get_json() == {"errorMessage": "block not found"}


def test_block_hash_must_be_hex(client):
    assert client.get("/blocks/xyz").status_code == 404


def test_mempool_empty_then_filled(client, chain):
    assert client.get("/mempool").get_json() == []
    tx = Tx(timestamp=1, tx_ins=[TxIn("a", 0, "alice")], tx_outs=[TxOut("bob", 5)])
    tx.compute_id()
    chain.mempool.txs.append(tx)
    data = client.get("/mempool").get_json()
    assert data == [tx.to_dict()]