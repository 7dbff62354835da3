"""PKCS#7 padding helpers used by the request signers."""


def pkcs7_pad(data: bytes, block_size: int) -> bytes:
    """Return ``data`` padded to a multiple of ``block_size`` with PKCS#7 bytes."""
    padding = block_size - (len(data) % block_size)
    return bytes(data) + bytes([padding]) * padding


def padding_size(size: int) -> int:
    """Round ``size`` up to the next multiple of 16."""
    remainder = size % 16
    if remainder:
        return size + (16 - remainder)
    return size