"""Hex helpers for request and response bodies"""

from fastapi import HTTPException, status


def from_hex(value: str, field: str = "value") -> bytes:
    """Decode a hex string from a request, answering 422 when malformed"""
    try:
        return bytes.fromhex(value.removeprefix("0x"))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=f"{field} must be a hex string"
        )


def to_hex(value: bytes) -> str:
    return value.hex()
