from typing import List, Optional

from .exceptions import ValidationError
from .models import Account, APIKey, APIKeyUsage, CreateAPIKeyRequest, CreateAPIKeyResponse, CreditTransaction, Credits
from .utils import build_query_string, require_id


class AccountService:
    """Account, credit balance and API key operations"""

    def __init__(self, client):
        self._client = client

    async def get(self) -> Account:
        return await self._client.request("GET", "/account", response_model=Account)

    async def get_credits(self) -> Credits:
        return await self._client.request("GET", "/credits", response_model=Credits)

    async def get_credit_transactions(self, *, limit: int = 0, offset: int = 0) -> List[CreditTransaction]:
        query = build_query_string({"limit": limit, "offset": offset})
        return await self._client.request("GET", "/credits/transactions" + query, response_model=List[CreditTransaction])

    async def list_api_keys(self) -> List[APIKey]:
        return await self._client.request("GET", "/keys", response_model=List[APIKey])

    async def get_api_key(self, key_id: str) -> APIKey:
        path = "/keys/" + require_id(key_id, "API key ID is required")
        return await self._client.request("GET", path, response_model=APIKey)

    async def get_api_key_usage(self, key_id: str) -> APIKeyUsage:
        path = "/keys/" + require_id(key_id, "API key ID is required") + "/usage"
        return await self._client.request("GET", path, response_model=APIKeyUsage)

    async def create_api_key(self, name: str, *, expires_at: Optional[str] = None) -> CreateAPIKeyResponse:
        """Create an API key; the full key value is only returned by this call"""
        if not name:
            raise ValidationError("API key name is required")
        request = CreateAPIKeyRequest(name=name, expires_at=expires_at)
        return await self._client.request("POST", "/account/keys", body=request, response_model=CreateAPIKeyResponse)

    async def revoke_api_key(self, key_id: str) -> None:
        path = "/account/keys/" + require_id(key_id, "API key ID is required")
        await self._client.request("DELETE", path)
