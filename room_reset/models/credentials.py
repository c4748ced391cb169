"""
Domain model for the Login with Amazon credentials kept in Secrets Manager.
"""

from pydantic import AnyHttpUrl, BaseModel, Field


class OAuthCredentials(BaseModel):
    """OAuth2 client credentials used for the refresh-token grant."""

    client_id: str = Field(..., alias="lwa-client-id")
    client_secret: str = Field(..., alias="lwa-client-secret")
    refresh_token: str = Field(..., alias="lwa-refresh-token")
    scope: str = Field(..., alias="lwa-auth-scope")
    token_endpoint_url: AnyHttpUrl = Field(
        ...,
        alias="lwa-auth-url",
        description="Token endpoint receiving the refresh-token grant.",
    )

    class Config:
        allow_population_by_field_name = True

    def missing_fields(self) -> list[str]:
        """Return the names of fields holding an empty value."""
        return [name for name, value in self.dict().items() if not value]

    def __repr__(self) -> str:
        # Secrets never end up in logs through repr().
        return (
            f"OAuthCredentials(client_id={self.client_id!r}, "
            f"token_endpoint_url={self.token_endpoint_url!r})"
        )

    __str__ = __repr__


__all__ = ["OAuthCredentials"]
