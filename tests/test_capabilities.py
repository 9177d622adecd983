"""
Tests for the capability bitmask
"""

import pytest

from mint_contracts.capabilities import Capability, CapabilityTable
from mint_contracts.errors import Unauthorized
from mint_contracts.ledger import CallContext

from .mock import MockCommon


class TestCapabilityTable:
    """Pure lookups over a capability partition"""

    def setup_method(self):
        self.storage = {}
        self.table = CapabilityTable(self.storage)
        self.owner = b"o" * 28
        self.other = b"x" * 28
        self.table.initialize_owner(self.owner)

    def test_owner_holds_only_owner(self):
        """Test OWNER does not imply any other bit"""
        assert self.table.has_capability(self.owner, Capability.OWNER)
        assert not self.table.has_capability(self.owner, Capability.MANAGER)
        assert not self.table.has_capability(self.owner, Capability.MINTER)

    def test_has_capability_requires_all_bits(self):
        self.table.grant(self.owner, self.other, Capability.MINTER)
        assert self.table.has_capability(self.other, Capability.MINTER)
        assert not self.table.has_capability(self.other, Capability.MINTER | Capability.MANAGER)
        assert self.table.has_any_capability(self.other, Capability.MINTER | Capability.MANAGER)

    def test_grant_requires_owner(self):
        with pytest.raises(Unauthorized, match="lacks capability"):
            self.table.grant(self.other, self.other, Capability.MANAGER)

    def test_revoke_and_renounce(self):
        self.table.grant(self.owner, self.other, Capability.MINTER | Capability.MANAGER)
        self.table.revoke(self.owner, self.other, Capability.MINTER)
        assert self.table.capabilities_of(self.other) == Capability.MANAGER

        self.table.renounce(self.other, Capability.MANAGER)
        assert self.table.capabilities_of(self.other) == Capability.NONE

    def test_require_capability(self):
        self.table.require_capability(self.owner, Capability.OWNER)
        with pytest.raises(Unauthorized):
            self.table.require_capability(self.other, Capability.OWNER)


class TestRegistryCapabilities(MockCommon):
    """Capability entries of a deployed registry"""

    def test_grant_is_rolled_back_on_failure(self):
        registry = self.manager.deploy_unique("drops", "DROP", self.owner)
        with pytest.raises(Unauthorized):
            registry.grant_capability(CallContext(self.buyer), self.buyer, Capability.OWNER)
        assert registry.has_capability(self.owner, Capability.OWNER)
        assert not registry.has_capability(self.buyer, Capability.OWNER)

    def test_owner_grants_minter(self):
        registry = self.manager.deploy_unique("drops", "DROP", self.owner)
        registry.grant_capability(CallContext(self.owner), self.signer.address, Capability.MINTER)
        assert registry.has_capability(self.signer.address, Capability.MINTER)
