"""Contract drift detection tests.

These tests verify that the keys of ``SyncPayload.to_dict()`` match the
canonical wire contracts defined in ``functions_sync.models.contracts``.
If a key is added to or removed from a model without updating the
contract TypedDict, these tests fail.
"""

from __future__ import annotations

import unittest
from typing import get_type_hints

from functions_sync.models.contracts import (
    FunctionContract,
    FunctionSecretsContract,
    HostSecretsContract,
    SecretsContract,
    SyncPayloadContract,
    TriggerContract,
)
from functions_sync.models.payload import (
    FunctionDescriptorResponse,
    FunctionSecretsEntry,
    SecretsSection,
    SyncPayload,
)


def _contract_keys(td: type) -> set[str]:
    """Extract the declared field names from a TypedDict class."""
    return set(get_type_hints(td).keys())


def _sample_payload() -> SyncPayload:
    return SyncPayload(
        triggers=[{"type": "httpTrigger", "direction": "in", "name": "req", "functionName": "f1"}],
        functions=[FunctionDescriptorResponse(name="f1")],
        secrets=SecretsSection(function=[FunctionSecretsEntry(name="f1")]),
    )


class TestSyncPayloadContract(unittest.TestCase):
    def setUp(self) -> None:
        self.document = _sample_payload().to_dict()

    def test_top_level_keys(self) -> None:
        assert set(self.document) == _contract_keys(SyncPayloadContract)

    def test_function_keys(self) -> None:
        assert set(self.document["functions"][0]) == _contract_keys(FunctionContract)

    def test_secrets_keys(self) -> None:
        assert set(self.document["secrets"]) == _contract_keys(SecretsContract)
        assert set(self.document["secrets"]["host"]) == _contract_keys(HostSecretsContract)
        assert set(self.document["secrets"]["function"][0]) == _contract_keys(FunctionSecretsContract)

    def test_trigger_keys_are_known(self) -> None:
        assert set(self.document["triggers"][0]) <= _contract_keys(TriggerContract)
