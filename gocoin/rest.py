"""JSON HTTP interface to the chain."""

from __future__ import annotations

import json
import re
from typing import Any

from flask import Flask, Response, abort, request

from gocoin.blockchain import Blockchain, NotFoundError, find_block
from gocoin.db import DB_NAME, Database

_HASH_PATTERN = re.compile(r"[a-f0-9]+")
_ANY_METHOD = ["GET", "POST", "PUT", "PATCH", "DELETE"]


def _json(data: Any, status: int = 200) -> Response:
    return Response(json.dumps(data) + "\n", status=status, mimetype="application/json")


def _documentation(port: int) -> list[dict[str, str]]:
    def url(path: str) -> str:
        return f"http://localhost:{port}{path}"

    entries = [
        ("/", "GET", "See Documentation", ""),
        ("/status", "GET", "See All Blocks", ""),
        ("/blocks", "GET", "See All Blocks", ""),
        ("/blocks", "POST", "Add A Block", "data:string"),
        ("/blocks/{hash}", "GET", "See A Block", ""),
    ]
    result = []
    for path, method, description, payload in entries:
        entry = {"url": url(path), "method": method, "description": description}
        if payload:
            entry["payload"] = payload
        result.append(entry)
    return result


def create_app(chain: Blockchain, port: int = 4000) -> Flask:
    """Build the application serving ``chain``; ``port`` appears in the docs."""
    app = Flask(__name__)

    @app.after_request
    def _json_content_type(response: Response) -> Response:
        response.headers["Content-Type"] = "application/json"
        return response

    @app.route("/", methods=["GET"])
    def documentation() -> Response:
        return _json(_documentation(port))

    @app.route("/status", methods=_ANY_METHOD)
    def status() -> Response:
        return _json(chain.to_dict())

    @app.route("/blocks", methods=["GET", "POST"])
    def blocks() -> Response:
        if request.method == "POST":
            try:
                json.loads(request.get_data(as_text=True))
            except ValueError:
                return _json({"errorMessage": "invalid request body"}, 400)
            chain.add_block()
            return Response(status=201, mimetype="application/json")
        return _json([block.to_dict() for block in chain.blocks()])

    @app.route("/blocks/<block_hash>", methods=["GET"])
    def block(block_hash: str) -> Response:
        if not _HASH_PATTERN.fullmatch(block_hash):
            abort(404)
        try:
            found = find_block(chain.db, block_hash)
        except NotFoundError as err:
            return _json({"errorMessage": str(err)})
        return _json(found.to_dict())

    @app.route("/mempool", methods=_ANY_METHOD)
    def mempool() -> Response:
        return _json([tx.to_dict() for tx in chain.mempool.txs])

    return app


def start(port: int, chain: Blockchain | None = None) -> None:
    """Serve the REST interface on ``port`` until interrupted."""
    if chain is None:
        with Database(DB_NAME) as db:
            start(port, Blockchain.load(db))
        return
    app = create_app(chain, port)
    print(f"Listening on http://localhost:{port}")
    app.run(host="0.0.0.0", port=port, threaded=False)