from unittest.mock import patch

import requests

from storefront.api.dependencies import get_token
from storefront.services.profile_client import ProfileClient

from tests.conftest import make_response

GET = "storefront.services.profile_client.requests.get"

PROFILE = {
    "id": "u-1",
    "firstName": "Dilnoza",
    "lastName": "Rahimova",
    "email": "dilnoza@example.com",
    "phone": "+998907654321",
    "role": "user",
    "isActive": True,
}


class TestFetchProfile:
    def test_no_token_is_guest(self):
        with patch(GET) as get:
            assert ProfileClient().fetch_profile(None) is None
        get.assert_not_called()

    def test_profile_is_parsed(self):
        with patch(GET, return_value=make_response(200, PROFILE)) as get:
            user = ProfileClient(base_url="http://backend.test/api").fetch_profile("tok")

        assert get.call_args.args == ("http://backend.test/api/auth/profile",)
        assert get.call_args.kwargs["headers"] == {"Authorization": "Bearer tok"}
        assert user.first_name == "Dilnoza"
        assert user.phone == "+998907654321"

    def test_rejected_token_is_guest(self):
        with patch(GET, return_value=make_response(401, {"message": "Unauthorized"})):
            assert ProfileClient().fetch_profile("expired") is None

    def test_backend_down_is_guest(self):
        with patch(GET, side_effect=requests.ConnectionError("down")):
            assert ProfileClient().fetch_profile("tok") is None


class TestGetToken:
    def test_bearer(self):
        assert get_token("Bearer abc") == "abc"

    def test_other_schemes_ignored(self):
        assert get_token("Basic abc") is None
        assert get_token("Bearer ") is None
        assert get_token(None) is None
