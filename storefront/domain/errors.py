# storefront/domain/errors.py


class CheckoutError(Exception):
    """Bazowy blad checkoutu."""


class ValidationError(CheckoutError):
    """
    Blad walidacji formularza, zawsze przed wywolaniem sieciowym.
    code: missing_required_fields | invalid_phone | empty_cart
    """

    MISSING_REQUIRED_FIELDS = "missing_required_fields"
    INVALID_PHONE = "invalid_phone"
    EMPTY_CART = "empty_cart"

    CODES = (MISSING_REQUIRED_FIELDS, INVALID_PHONE, EMPTY_CART)

    def __init__(self, code: str):
        if code not in self.CODES:
            raise ValueError(f"Unknown validation code: {code}")
        super().__init__(code)
        self.code = code


class SubmissionError(CheckoutError):
    """
    POST /orders nie powiodl sie.
    kind: network (brak odpowiedzi) | server (odpowiedz inna niz 2xx)
    """

    NETWORK = "network"
    SERVER = "server"

    def __init__(self, kind: str, message: str, status_code: int | None = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code

    def __str__(self):
        if self.status_code is not None:
            return f"{self.kind} error ({self.status_code}): {self.message}"
        return f"{self.kind} error: {self.message}"


class NotificationError(CheckoutError):
    """Blad kanalu powiadomien - tylko logowany, nigdy nie wychodzi poza serwis."""


class CheckoutBusyError(CheckoutError):
    """Submit juz trwa dla tej sesji."""
