import hmac


def verify_upload_key(token: str, secret: str) -> bool:
    if not token or not secret:
        return False
    return hmac.compare_digest(token.encode("utf-8"), secret.encode("utf-8"))
