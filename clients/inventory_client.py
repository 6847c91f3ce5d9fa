import requests
from typing import Optional, Dict, Any, List


class InventoryClientError(Exception):
    def __init__(self, status_code: int, detail: Any):
        super().__init__(f"HTTP {status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class InventoryClient:
    """
    Thin client for the paint inventory API.

    `session` is anything with a requests-style `.request(method, url, **kw)`;
    defaults to a fresh `requests.Session`.
    """
    def __init__(self, base_url: str, session: Optional[Any] = None, timeout: int = 30):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _call(self, method: str, path: str, **kw):
        r = self.session.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kw)
        if r.status_code >= 400:
            try:
                detail = r.json().get("detail")
            except ValueError:
                detail = r.text
            raise InventoryClientError(r.status_code, detail)
        return r

    def list_products(self, status: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {"status": status} if status else None
        return self._call("GET", "/products", params=params).json()

    def get_product(self, product_id: str) -> Dict[str, Any]:
        return self._call("GET", f"/products/{product_id}").json()

    def create_product(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._call("POST", "/products", json=payload).json()

    def update_product(self, product_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        return self._call("PUT", f"/products/{product_id}", json=changes).json()

    def delete_product(self, product_id: str) -> None:
        self._call("DELETE", f"/products/{product_id}")

    def download_proforma(self, brand: str, status: str = "todos") -> bytes:
        r = self._call("GET", "/reports/proforma", params={"brand": brand, "status": status})
        return r.content
