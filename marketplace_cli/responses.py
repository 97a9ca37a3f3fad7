"""
Response envelopes returned by the marketplace API.

Every API response wraps its payload as ``{"response": {...}}``.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .models import Product


def _lookup(mapping: Dict[str, Any], key: str) -> Any:
    """Read ``key`` exactly, falling back to a case-insensitive match."""
    if key in mapping:
        return mapping[key]
    lowered = key.lower()
    for candidate, value in mapping.items():
        if isinstance(candidate, str) and candidate.lower() == lowered:
            return value
    return None


def _load_payload(body: Union[str, bytes]) -> Dict[str, Any]:
    document = json.loads(body)
    if not isinstance(document, dict):
        raise ValueError("response is not a JSON object")
    payload = _lookup(document, 'response')
    if not isinstance(payload, dict):
        raise ValueError("missing \"response\" envelope")
    return payload


def _status_code(payload: Dict[str, Any]) -> Optional[int]:
    return _lookup(payload, 'statuscode')


@dataclass
class GetProductResponse:
    """Envelope of a single product: GET and PUT on /api/v1/products/{id}."""
    data: Optional[Product]
    status_code: Optional[int] = None
    message: Optional[str] = None

    @classmethod
    def from_json(cls, body: Union[str, bytes]) -> 'GetProductResponse':
        """
        Decode a response body.

        Raises:
            ValueError: If the body is not JSON or lacks the envelope or data
            TypeError: If the product JSON has the wrong shape
        """
        payload = _load_payload(body)
        data = _lookup(payload, 'data')
        if data is None:
            raise ValueError("response has no product data")
        return cls(
            data=Product.from_dict(data),
            status_code=_status_code(payload),
            message=_lookup(payload, 'message'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'response': {
                'data': self.data.to_dict() if self.data is not None else None,
                'statuscode': self.status_code,
                'message': self.message,
            }
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


@dataclass
class ListProductResponse:
    """Envelope of one page of products: GET /api/v1/products."""
    products: List[Product] = field(default_factory=list)
    total_count: int = 0
    pagination: Optional[Dict[str, Any]] = None
    status_code: Optional[int] = None
    message: Optional[str] = None

    @classmethod
    def from_json(cls, body: Union[str, bytes]) -> 'ListProductResponse':
        payload = _load_payload(body)
        params = _lookup(payload, 'params') or {}
        if not isinstance(params, dict):
            raise ValueError("\"params\" is not an object")
        products = _lookup(payload, 'dataList') or []
        if not isinstance(products, list):
            raise ValueError("\"dataList\" is not a list")
        return cls(
            products=[Product.from_dict(item) for item in products],
            total_count=int(_lookup(params, 'itemsnumber') or 0),
            pagination=_lookup(params, 'pagination'),
            status_code=_status_code(payload),
            message=_lookup(payload, 'message'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'response': {
                'dataList': [product.to_dict() for product in self.products],
                'params': {
                    'itemsnumber': self.total_count,
                    'pagination': self.pagination,
                },
                'statuscode': self.status_code,
                'message': self.message,
            }
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())
