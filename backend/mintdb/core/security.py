"""
Helpers for SMS verification codes.
"""
import hashlib
import secrets


def hash_code(code: str) -> str:
    """
    Hash a verification code using SHA256.
    
    Args:
        code: Plain verification code
        
    Returns:
        Hex digest, the form stored in users.codeHash
    """
    return hashlib.sha256(code.encode()).hexdigest()


def generate_sms_code(length: int = 6) -> str:
    """
    Generate a random numeric verification code.
    
    Args:
        length: Number of digits
        
    Returns:
        Code string, zero-padded to length
    """
    if length < 1:
        raise ValueError("Code length must be positive")
    return "".join(secrets.choice("0123456789") for _ in range(length))
