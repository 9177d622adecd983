"""
Registry Endpoint Tests

Test suite for registry deployment, capabilities and administrative entries.
"""

import pytest
from fastapi.testclient import TestClient

from api.tests.assertions import (
    assert_engine_error,
    assert_error_response,
    assert_successful_response,
    assert_valid_address,
)
from api.tests.factories import ClaimConditionFactory, PrincipalFactory

MANAGER = 1 << 2


@pytest.mark.api
class TestRegistryCreateEndpoint:
    """Tests for POST /api/v1/registries/"""

    def test_create_registry_success(self, client: TestClient, unique_registry):
        """Test deployment installs the claimable module"""
        assert unique_registry["name"] == "drops"
        assert unique_registry["kind"] == "unique"
        assert_valid_address(unique_registry["address"])
        assert len(unique_registry["modules"]) == 1

        module = unique_registry["modules"][0]
        assert module["callback_functions"] == ["before_mint_unique"]
        assert module["fallback_functions"]["set_claim_condition"] == MANAGER
        assert module["fallback_functions"]["get_claim_condition"] == 0

    def test_create_registry_duplicate_name(self, client: TestClient, auth_headers, owner, unique_registry):
        """Test names are unique"""
        response = client.post(
            "/api/v1/registries/",
            json={"kind": "fungible", "name": "drops", "symbol": "D", "owner": owner},
            headers=auth_headers,
        )
        assert_error_response(response, 409, "already exists")

    def test_create_registry_unauthorized(self, client: TestClient, owner):
        """Test deployment without API key"""
        response = client.post(
            "/api/v1/registries/", json={"kind": "unique", "name": "x", "owner": owner}
        )
        assert_error_response(response, 401, "API key")

    def test_create_registry_bad_owner_hex(self, client: TestClient, auth_headers):
        """Test malformed hex is rejected"""
        response = client.post(
            "/api/v1/registries/",
            json={"kind": "unique", "name": "x", "owner": "not-hex"},
            headers=auth_headers,
        )
        assert_error_response(response, 422, "hex")


@pytest.mark.api
class TestRegistryListEndpoint:
    """Tests for GET /api/v1/registries/"""

    def test_list_registries(self, client: TestClient, auth_headers, unique_registry):
        response = client.get("/api/v1/registries/", headers=auth_headers)
        data = assert_successful_response(response, ["registries", "total"])
        assert data["total"] == 1
        assert data["registries"][0]["address"] == unique_registry["address"]

    def test_get_unknown_registry(self, client: TestClient, auth_headers):
        response = client.get("/api/v1/registries/missing", headers=auth_headers)
        assert_error_response(response, 404, "not found")


@pytest.mark.api
class TestCapabilitiesEndpoint:
    """Tests for POST /api/v1/registries/{name}/capabilities"""

    def test_owner_grants_manager(self, client: TestClient, auth_headers, owner, unique_registry):
        manager = PrincipalFactory.create("manager")
        response = client.post(
            "/api/v1/registries/drops/capabilities",
            json={"caller": owner, "principal": manager, "bits": MANAGER},
            headers=auth_headers,
        )
        data = assert_successful_response(response, ["principal", "bits"])
        assert data["bits"] == MANAGER

    def test_non_owner_cannot_grant(self, client: TestClient, auth_headers, buyer, unique_registry):
        response = client.post(
            "/api/v1/registries/drops/capabilities",
            json={"caller": buyer, "principal": buyer, "bits": MANAGER},
            headers=auth_headers,
        )
        assert_engine_error(response, 403, "Unauthorized", "authorization")


@pytest.mark.api
class TestConditionEndpoints:
    """Tests for sale config and claim condition entries"""

    def setup_method(self):
        """Set up principals shared by the tests"""
        self.manager = PrincipalFactory.create("manager")
        self.platform = PrincipalFactory.create("platform")

    def _grant_manager(self, client, auth_headers, owner):
        client.post(
            "/api/v1/registries/drops/capabilities",
            json={"caller": owner, "principal": self.manager, "bits": MANAGER},
            headers=auth_headers,
        )

    def test_install_data_sets_primary_recipient(self, client: TestClient, auth_headers, seller, unique_registry):
        response = client.get("/api/v1/registries/drops/sale-config", headers=auth_headers)
        data = assert_successful_response(response)
        assert data == {"primary_recipient": seller, "platform_fee_recipient": "", "platform_fee_bps": 0}

    def test_set_sale_config_requires_manager(self, client: TestClient, auth_headers, owner, seller, unique_registry):
        """OWNER alone does not imply MANAGER"""
        response = client.put(
            "/api/v1/registries/drops/sale-config",
            json={"caller": owner, "primary_recipient": seller},
            headers=auth_headers,
        )
        assert_engine_error(response, 403, "Unauthorized", "authorization")

    def test_set_sale_config(self, client: TestClient, auth_headers, owner, seller, unique_registry):
        self._grant_manager(client, auth_headers, owner)
        response = client.put(
            "/api/v1/registries/drops/sale-config",
            json={
                "caller": self.manager,
                "primary_recipient": seller,
                "platform_fee_recipient": self.platform,
                "platform_fee_bps": 250,
            },
            headers=auth_headers,
        )
        data = assert_successful_response(response)
        assert data["platform_fee_bps"] == 250
        assert data["platform_fee_recipient"] == self.platform

    def test_set_sale_config_fee_out_of_range(self, client: TestClient, auth_headers, owner, seller, unique_registry):
        self._grant_manager(client, auth_headers, owner)
        response = client.put(
            "/api/v1/registries/drops/sale-config",
            json={
                "caller": self.manager,
                "primary_recipient": seller,
                "platform_fee_recipient": self.platform,
                "platform_fee_bps": 10_001,
            },
            headers=auth_headers,
        )
        assert_engine_error(response, 400, "InvalidFeeBasisPoints", "configuration")

    def test_set_and_get_claim_condition(self, client: TestClient, auth_headers, owner, unique_registry):
        self._grant_manager(client, auth_headers, owner)
        body = ClaimConditionFactory.create(self.manager, available_supply=10, price_per_unit=5)
        response = client.put("/api/v1/registries/drops/claim-condition", json=body, headers=auth_headers)
        data = assert_successful_response(response)
        assert data["available_supply"] == 10
        assert data["price_per_unit"] == 5

        response = client.get("/api/v1/registries/drops/claim-condition", headers=auth_headers)
        assert assert_successful_response(response)["start_time"] == body["start_time"]

    def test_invalid_claim_condition(self, client: TestClient, auth_headers, owner, unique_registry):
        self._grant_manager(client, auth_headers, owner)
        body = ClaimConditionFactory.create(self.manager, allowlist_root="ab")
        response = client.put("/api/v1/registries/drops/claim-condition", json=body, headers=auth_headers)
        assert_engine_error(response, 400, "InvalidCondition", "configuration")

    def test_signing_domain(self, client: TestClient, auth_headers, unique_registry):
        response = client.get("/api/v1/registries/drops/signing-domain", headers=auth_headers)
        data = assert_successful_response(response, ["name", "version", "chain_id", "verifying_contract"])
        assert data["name"] == "ClaimableUnique"
        assert data["verifying_contract"] == unique_registry["address"]

    def test_request_not_used(self, client: TestClient, auth_headers, unique_registry):
        response = client.get(f"/api/v1/registries/drops/requests/{'11' * 32}", headers=auth_headers)
        assert assert_successful_response(response)["used"] is False

    def test_token_id_rejected_on_unique_registry(self, client: TestClient, auth_headers, owner, unique_registry):
        self._grant_manager(client, auth_headers, owner)
        body = ClaimConditionFactory.create(self.manager, token_id=3)
        response = client.put("/api/v1/registries/drops/claim-condition", json=body, headers=auth_headers)
        assert_error_response(response, 422, "only accepted by semi-fungible")

        response = client.get("/api/v1/registries/drops/sale-config?token_id=3", headers=auth_headers)
        assert_error_response(response, 422, "only accepted by semi-fungible")


@pytest.mark.api
class TestSemiFungibleConditionEndpoints:
    """Token-keyed entries of a semi-fungible registry"""

    def setup_method(self):
        self.manager = PrincipalFactory.create("manager")
        self.wallet = PrincipalFactory.create("wallet")

    def _grant_manager(self, client, auth_headers, owner):
        client.post(
            "/api/v1/registries/editions/capabilities",
            json={"caller": owner, "principal": self.manager, "bits": MANAGER},
            headers=auth_headers,
        )

    def test_set_claim_condition_requires_token_id(
        self, client: TestClient, auth_headers, owner, semi_fungible_registry
    ):
        self._grant_manager(client, auth_headers, owner)
        body = ClaimConditionFactory.create(self.manager, available_supply=7)
        response = client.put("/api/v1/registries/editions/claim-condition", json=body, headers=auth_headers)
        assert_error_response(response, 422, "token_id is required")

        response = client.get("/api/v1/registries/editions/claim-condition?token_id=0", headers=auth_headers)
        assert assert_successful_response(response)["available_supply"] == 0

    def test_reads_require_token_id(self, client: TestClient, auth_headers, semi_fungible_registry):
        response = client.get("/api/v1/registries/editions/claim-condition", headers=auth_headers)
        assert_error_response(response, 422, "token_id is required")

        response = client.get(f"/api/v1/registries/editions/consumption/{self.wallet}", headers=auth_headers)
        assert_error_response(response, 422, "token_id is required")

    def test_set_claim_condition_for_token(self, client: TestClient, auth_headers, owner, semi_fungible_registry):
        self._grant_manager(client, auth_headers, owner)
        body = ClaimConditionFactory.create(self.manager, available_supply=7, token_id=4)
        response = client.put("/api/v1/registries/editions/claim-condition", json=body, headers=auth_headers)
        assert assert_successful_response(response)["available_supply"] == 7

        response = client.get("/api/v1/registries/editions/claim-condition?token_id=0", headers=auth_headers)
        assert assert_successful_response(response)["available_supply"] == 0

        response = client.get(
            f"/api/v1/registries/editions/consumption/{self.wallet}?token_id=4", headers=auth_headers
        )
        assert assert_successful_response(response)["consumed"] == 0

    def test_sale_config_without_token_id_is_registry_default(
        self, client: TestClient, auth_headers, seller, semi_fungible_registry
    ):
        response = client.get("/api/v1/registries/editions/sale-config", headers=auth_headers)
        assert assert_successful_response(response)["primary_recipient"] == seller
