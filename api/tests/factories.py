"""
Test Data Factories

Builders for principals and request bodies used across API tests.
"""

import hashlib
import time


class PrincipalFactory:
    """Deterministic 28-byte principals, hex-encoded"""

    @staticmethod
    def create(label: str) -> str:
        return hashlib.blake2b(label.encode(), digest_size=28).hexdigest()


class ClaimConditionFactory:
    """Claim condition request bodies"""

    @staticmethod
    def create(caller: str, **overrides) -> dict:
        now = int(time.time())
        body = {
            "caller": caller,
            "available_supply": 100,
            "allowlist_root": "00" * 32,
            "price_per_unit": 0,
            "currency": "",
            "start_time": now - 60,
            "end_time": now + 3600,
            "max_per_wallet": 0,
            "aux_data": "",
            "reset_consumption": False,
        }
        body.update(overrides)
        return body
