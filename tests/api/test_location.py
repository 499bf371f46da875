from unittest.mock import AsyncMock

from fastapi.testclient import TestClient

from eventradar.exceptions import UpstreamError
from eventradar.schemas.common import ReverseGeocodeResponse

URL = "/api/v1/location/reverse-geocode"


def test_reverse_geocode(app, client: TestClient):
    app.state.geocoder.reverse = AsyncMock(
        return_value=ReverseGeocodeResponse(
            display_name="Menteng, Jakarta Pusat, Indonesia",
            address={"city": "Jakarta", "country_code": "id"},
        )
    )

    response = client.get(URL, params={"lat": "-6.2", "lon": "106.816"})

    assert response.status_code == 200
    assert response.json()["display_name"] == "Menteng, Jakarta Pusat, Indonesia"
    assert response.json()["address"]["city"] == "Jakarta"
    point = app.state.geocoder.reverse.await_args.args[0]
    assert (point.latitude, point.longitude) == (-6.2, 106.816)


def test_reverse_geocode_requires_coordinates(app, client: TestClient):
    app.state.geocoder.reverse = AsyncMock()

    response = client.get(URL, params={"lat": "-6.2"})
    assert response.status_code == 400

    response = client.get(URL)
    assert response.status_code == 400
    assert response.json() == {"message": "Latitude and Longitude are required"}

    app.state.geocoder.reverse.assert_not_called()


def test_reverse_geocode_upstream_failure(app, client: TestClient):
    app.state.geocoder.reverse = AsyncMock(side_effect=UpstreamError("Failed to fetch address from OpenStreetMap"))

    response = client.get(URL, params={"lat": "-6.2", "lon": "106.816"})

    assert response.status_code == 502
    assert response.json()["message"] == "Failed to fetch address from OpenStreetMap"
