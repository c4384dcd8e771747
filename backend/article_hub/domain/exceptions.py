"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class SlugConflictError(DuplicateEntityError):
    """Raised by the article store when its unique slug index rejects a write."""

    def __init__(self, slug: str):
        super().__init__("Article", "slug", slug)
        self.slug = slug


class DuplicateSlugError(Exception):
    """Raised when an article title derives a slug that another article owns.

    User-correctable: the caller should pick a different title.
    """

    def __init__(self, slug: str):
        self.slug = slug
        self.message = "An article with this title already exists"
        super().__init__(f"{self.message} (slug '{slug}')")


class ValidationError(Exception):
    """Raised when submitted article fields are missing or inconsistent.

    ``errors`` maps each offending field name to a human-readable message.
    """

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        super().__init__(
            "; ".join(f"{name}: {message}" for name, message in self.errors.items())
        )

    @property
    def fields(self) -> list[str]:
        return list(self.errors)


class UnauthenticatedError(Exception):
    """Raised when a request carries no valid session."""

    def __init__(self, message: str = "Authentication required"):
        self.message = message
        super().__init__(message)


class IdentityError(Exception):
    """Raised when a provider session is valid but its claims are unusable."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class AuthProviderError(Exception):
    """Raised when the identity provider returns an error.

    ``status_code`` is the provider's HTTP status; 4xx values carry a
    user-facing ``message`` (bad credentials, weak password, ...).
    """

    def __init__(self, provider: str, status_code: int, message: str):
        self.provider = provider
        self.status_code = status_code
        self.message = message
        super().__init__(f"[{provider}] {status_code}: {message}")

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500
