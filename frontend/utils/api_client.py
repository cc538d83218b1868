import requests
from typing import Dict, Any, Optional
import json
from config import API_BASE_URL, API_TIMEOUT
from utils.booking_wizard import SubmissionError


class APIClient:
    """Client for communicating with the backend API."""

    def __init__(self, base_url: str = API_BASE_URL, timeout: float = API_TIMEOUT):
        self.base_url = base_url
        self.timeout = timeout
        self.session = requests.Session()

        # Set default headers
        self.session.headers.update({
            "Content-Type": "application/json"
        })

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            response = self.session.get(f"{self.base_url}{path}", params=params, timeout=self.timeout)
        except requests.RequestException as e:
            return {"success": False, "error": f"API unreachable: {e}", "status_code": None}
        return self._handle_response(response)

    def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self.session.post(f"{self.base_url}{path}", json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            return {"success": False, "error": f"API unreachable: {e}", "status_code": None}
        return self._handle_response(response)

    def get_site(self) -> Dict[str, Any]:
        """Get site settings (hero image, brand)."""
        return self._get("/api/site")

    def get_regions(self) -> Dict[str, Any]:
        """Get published regions."""
        return self._get("/api/regions")

    def get_region(self, slug: str) -> Dict[str, Any]:
        """Get a region with its destinations."""
        return self._get(f"/api/regions/{slug}")

    def get_destination(self, slug: str) -> Dict[str, Any]:
        """Get a destination with its places and journeys."""
        return self._get(f"/api/destinations/{slug}")

    def get_places(self, featured: bool = False) -> Dict[str, Any]:
        """Get published places, optionally only the featured ones."""
        return self._get("/api/places", params={"featured": "true"} if featured else None)

    def get_place(self, slug: str) -> Dict[str, Any]:
        """Get a place with its gallery and schema."""
        return self._get(f"/api/places/{slug}")

    def get_journeys(self, destination: Optional[str] = None, limit: Optional[int] = None) -> Dict[str, Any]:
        params = {}
        if destination:
            params["destination"] = destination
        if limit:
            params["limit"] = limit
        return self._get("/api/journeys", params=params or None)

    def get_day_trips(self) -> Dict[str, Any]:
        """Get the day trip listing, hero image and add-ons."""
        return self._get("/api/day-trips")

    def get_day_trip(self, slug: str) -> Dict[str, Any]:
        """Get one day trip with its route and applicable add-ons."""
        return self._get(f"/api/day-trips/{slug}")

    def submit_booking(self, snapshot: Dict[str, Any]) -> Dict[str, Any]:
        """Record a paid booking.

        Returns the API's own ``{"success", "bookingId"|"error"}`` body so the
        wizard can tell a refused write from a network failure, which raises
        ``SubmissionError``.
        """
        try:
            response = self.session.post(
                f"{self.base_url}/api/day-trip-bookings",
                json=snapshot,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise SubmissionError(str(e)) from e

        try:
            return response.json()
        except json.JSONDecodeError:
            return {"success": False, "error": f"HTTP {response.status_code}"}

    def subscribe(self, email: str, brand: Optional[str] = None) -> Dict[str, Any]:
        """Subscribe an email address to the newsletter."""
        payload = {"email": email}
        if brand:
            payload["brand"] = brand
        return self._post("/api/newsletter/subscribe", payload)

    def unsubscribe(self, token: str) -> Dict[str, Any]:
        """Unsubscribe using the token from a newsletter link."""
        return self._post("/api/newsletter/unsubscribe", {"token": token})

    def get_health(self) -> Dict[str, Any]:
        """Get API health status."""
        return self._get("/health")

    def _handle_response(self, response: requests.Response) -> Dict[str, Any]:
        """Handle API response and return JSON data or error."""
        try:
            data = response.json()
        except json.JSONDecodeError:
            data = {"error": "Invalid JSON response"}

        if response.status_code >= 400:
            error_msg = data.get("error", f"HTTP {response.status_code}")
            return {"success": False, "error": error_msg, "status_code": response.status_code}

        return {"success": True, "data": data}


# Global API client instance
api_client = APIClient()
