class LedgerError(Exception):
    """
    Base class for caller-correctable ledger failures.
    Carries the HTTP status code and message the transport layer responds with.
    """
    status_code: int = 400
    detail: str = "Ledger operation failed"

    def __init__(self, detail: str = None, status_code: int = None):
        if detail is not None:
            self.detail = detail
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.detail)

class InvalidArgumentError(LedgerError):
    def __init__(self, detail: str = "Invalid argument"):
        super().__init__(detail=detail, status_code=400)

class AccountNotFoundError(LedgerError):
    def __init__(self, account_id: str = None):
        self.account_id = account_id
        super().__init__(detail="Account not found", status_code=404)

class InsufficientFundsError(LedgerError):
    def __init__(self):
        super().__init__(detail="Insufficient balance", status_code=400)
