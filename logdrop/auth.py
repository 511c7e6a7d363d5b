import hmac


class AdminAuthorizer:
    def __init__(self, admin_token: str):
        self.admin_token = admin_token

    def _expected(self) -> bytes:
        return f"Bearer {self.admin_token}".encode("utf-8")

    def verify(self, authorization: str | None) -> bool:
        # An empty token means deletes are disabled.
        if not self.admin_token or authorization is None:
            return False
        return hmac.compare_digest(self._expected(), authorization.encode("utf-8"))
