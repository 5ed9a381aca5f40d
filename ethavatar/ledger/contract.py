# ethavatar/ledger/contract.py
"""
EthAvatar Ledger: Registry Contract

LedgerTransport bound to the EthAvatar registry contract through web3.py.

Writes are sent either through the node (eth_sendTransaction from the
node-managed account) or, when a local account is given, built, signed
and sent raw. Either way the transaction is signed by `signed_by`.

Events are delivered by polling a log filter created at subscription
time, so only events from the current block onwards are seen.

Usage:
    ledger = await ContractLedger.for_chain(w3)            # deployed address
    ledger = ContractLedger(w3, contract_address="0x...")  # explicit

    data_hash = await ledger.read_hash("0x...")
    await ledger.write_hash("Qm...", signed_by="0x...")

Updated: 2026-10-17
Version: 0.1.0
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections import deque
from pathlib import Path
from typing import Any, Deque, Dict, List, Optional

from eth_account.signers.local import LocalAccount
from web3 import AsyncWeb3, Web3

from .base import (
    LedgerTransport,
    EventStream,
    ChangeEvent,
    LedgerError,
    ContractNotFoundError,
    DID_SET_IPFS_HASH,
)


logger = logging.getLogger("ethavatar-ledger")


# =============================================================================
# Constants
# =============================================================================

ARTIFACT_PATH = Path(__file__).parent / "contracts" / "EthAvatar.json"

DEFAULT_POLL_INTERVAL = 2.0  # seconds


def _load_artifact() -> Dict[str, Any]:
    """Load contract ABI and deployments."""
    with open(ARTIFACT_PATH) as f:
        return json.load(f)


_ARTIFACT = _load_artifact()
CONTRACT_ABI: List[Dict] = _ARTIFACT["abi"]


def deployed_address(chain_id: int) -> Optional[str]:
    """Registry address deployed on a chain, if known."""
    network = _ARTIFACT.get("networks", {}).get(str(chain_id))
    if not network:
        return None
    return network.get("address")


# =============================================================================
# Event Stream
# =============================================================================

class FilterEventStream(EventStream):
    """Polls a DidSetIPFSHash log filter."""

    def __init__(self, w3: AsyncWeb3, event: Any, poll_interval: float):
        self._w3 = w3
        self._event = event
        self._poll_interval = poll_interval
        self._filter: Any = None
        self._pending: Deque[ChangeEvent] = deque()
        self._closed = False

    async def start(self) -> None:
        if self._filter is None:
            self._filter = await self._event.create_filter(from_block="latest")
            logger.info(f"Log filter installed: {self._filter.filter_id}")

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._filter is not None:
            try:
                await self._w3.eth.uninstall_filter(self._filter.filter_id)
            except Exception as e:
                logger.warning(f"Failed to uninstall filter: {e}")

    async def __anext__(self) -> ChangeEvent:
        await self.start()
        while not self._closed:
            if self._pending:
                return self._pending.popleft()

            entries = await self._filter.get_new_entries()
            for entry in entries:
                args = entry["args"]
                self._pending.append(
                    ChangeEvent(hash_address=args["hashAddress"], hash=args["hash"])
                )

            if not entries:
                await asyncio.sleep(self._poll_interval)

        raise StopAsyncIteration


# =============================================================================
# ContractLedger
# =============================================================================

class ContractLedger(LedgerTransport):
    """EthAvatar registry contract interface."""

    def __init__(
        self,
        w3: AsyncWeb3,
        contract_address: str,
        account: Optional[LocalAccount] = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        gas_limit: Optional[int] = None,
    ):
        """
        Args:
            w3: AsyncWeb3 instance
            contract_address: Deployed EthAvatar address
            account: Local signer (optional; node accounts otherwise)
            poll_interval: Event polling interval in seconds
            gas_limit: Gas limit for writes (estimated if None)
        """
        if not Web3.is_address(contract_address):
            raise ContractNotFoundError(f"Invalid contract address: {contract_address}")

        self._w3 = w3
        self.contract_address = Web3.to_checksum_address(contract_address)
        self._account = account
        self._poll_interval = poll_interval
        self._gas_limit = gas_limit

        self._contract = w3.eth.contract(
            address=self.contract_address,
            abi=CONTRACT_ABI,
        )

    @classmethod
    async def for_chain(
        cls,
        w3: AsyncWeb3,
        contract_address: Optional[str] = None,
        **kwargs,
    ) -> ContractLedger:
        """
        Bind to an explicit address, or the one deployed on the active chain.

        Raises:
            ContractNotFoundError: If no address is known for the chain
        """
        if contract_address is None:
            chain_id = await w3.eth.chain_id
            contract_address = deployed_address(chain_id)
            if contract_address is None:
                raise ContractNotFoundError(f"EthAvatar is not deployed on network {chain_id}")

        code = await w3.eth.get_code(Web3.to_checksum_address(contract_address))
        if not code:
            raise ContractNotFoundError(f"No contract code at {contract_address}")

        ledger = cls(w3, contract_address, **kwargs)
        logger.info(f"Bound to EthAvatar at {ledger.contract_address}")
        return ledger

    # =========================================================================
    # Read
    # =========================================================================

    async def read_hash(self, address: str) -> str:
        address = Web3.to_checksum_address(address)
        return await self._contract.functions.getIPFSHash(address).call()

    # =========================================================================
    # Write
    # =========================================================================

    async def write_hash(self, value: str, signed_by: str) -> str:
        signer = Web3.to_checksum_address(signed_by)
        fn = self._contract.functions.setIPFSHash(value)

        if self._account is not None:
            if self._account.address != signer:
                raise LedgerError(
                    f"Local signer {self._account.address} cannot sign for {signer}"
                )

            params: Dict[str, Any] = {
                "from": signer,
                "chainId": await self._w3.eth.chain_id,
                "nonce": await self._w3.eth.get_transaction_count(signer),
            }
            if self._gas_limit:
                params["gas"] = self._gas_limit

            tx = await fn.build_transaction(params)
            signed = self._account.sign_transaction(tx)
            tx_hash = await self._w3.eth.send_raw_transaction(signed.raw_transaction)
        else:
            params = {"from": signer}
            if self._gas_limit:
                params["gas"] = self._gas_limit
            tx_hash = await fn.transact(params)

        tx_id = Web3.to_hex(tx_hash)
        receipt = await self._w3.eth.wait_for_transaction_receipt(tx_hash)
        if receipt["status"] != 1:
            raise LedgerError(f"Transaction failed: {tx_id}")

        logger.info(f"setIPFSHash({value!r}) from {signer}: {tx_id}")
        return tx_id

    # =========================================================================
    # Events
    # =========================================================================

    def subscribe(self, event_name: str = DID_SET_IPFS_HASH) -> EventStream:
        if event_name != DID_SET_IPFS_HASH:
            raise LedgerError(f"Unknown event: {event_name}")
        event = getattr(self._contract.events, event_name)
        return FilterEventStream(self._w3, event, self._poll_interval)
