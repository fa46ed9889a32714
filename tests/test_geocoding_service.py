"""
地理編碼服務測試（以 mock 取代 Naver API）
"""
from unittest.mock import MagicMock, patch

import pytest
import requests

from jobmatch.models.schemas import CreateJobPostRequest
from jobmatch.services.geocoding_service import GeocodingError, GeocodingService, validate_search_query
from jobmatch.services.job_post_service import JobPostService

NAVER_RESPONSE = {
    "status": "OK",
    "addresses": [
        {
            "roadAddress": "서울특별시 중구 세종대로 110",
            "jibunAddress": "서울특별시 중구 태평로1가 31",
            "englishAddress": "110, Sejong-daero, Jung-gu, Seoul",
            "x": "126.9779692",
            "y": "37.5662952",
        },
        {
            "roadAddress": "",
            "jibunAddress": "座標缺漏的地址",
            "englishAddress": "",
            "x": "",
            "y": "",
        },
    ],
}


def mock_response(payload=None, status_error=None, json_error=None):
    response = MagicMock()
    if status_error:
        response.raise_for_status.side_effect = status_error
    if json_error:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


class TestValidateSearchQuery:
    """搜尋字串檢查"""

    @pytest.mark.parametrize("query", ["서울 중구 세종대로", "Sejong-daero 110", "花蓮市中正路"])
    def test_valid_queries(self, query):
        assert validate_search_query(query) is None

    @pytest.mark.parametrize("query", [None, "", "ab", "  a  "])
    def test_missing_or_short(self, query):
        assert validate_search_query(query) is not None

    @pytest.mark.parametrize("query", ["100%", "a=b road", "<script>"])
    def test_special_characters(self, query):
        assert validate_search_query(query) is not None

    @pytest.mark.parametrize("query", ["1 OR 1", "select * from", "x; DROP table"])
    def test_sql_keywords(self, query):
        assert validate_search_query(query) is not None

    def test_keyword_inside_word_is_allowed(self):
        # "Oregon"、"Ordinary" 含有 OR 但不是獨立字詞
        assert validate_search_query("Oregon Ordinary Street") is None


class TestGeocodingService:
    """Naver Geocoding 呼叫"""

    def test_not_configured(self):
        service = GeocodingService()
        assert not service.is_configured
        with pytest.raises(GeocodingError):
            service.search_address("세종대로 110")
        assert service.get_coordinates("세종대로 110") is None

    @patch("jobmatch.services.geocoding_service.requests.get")
    def test_search_parses_addresses(self, mock_get):
        mock_get.return_value = mock_response(NAVER_RESPONSE)
        service = GeocodingService("key-id", "key")

        candidates = service.search_address("세종대로 110")

        assert len(candidates) == 2
        assert candidates[0].road_address == "서울특별시 중구 세종대로 110"
        assert candidates[0].latitude == pytest.approx(37.5662952)
        assert candidates[0].longitude == pytest.approx(126.9779692)
        assert candidates[1].road_address is None
        assert candidates[1].latitude is None

        _, kwargs = mock_get.call_args
        assert kwargs["params"] == {"query": "세종대로 110"}
        assert kwargs["headers"]["X-NCP-APIGW-API-KEY-ID"] == "key-id"
        assert kwargs["headers"]["X-NCP-APIGW-API-KEY"] == "key"

    @patch("jobmatch.services.geocoding_service.requests.get")
    def test_get_coordinates_uses_first_candidate_with_coordinates(self, mock_get):
        payload = {"addresses": list(reversed(NAVER_RESPONSE["addresses"]))}
        mock_get.return_value = mock_response(payload)
        coordinates = GeocodingService("key-id", "key").get_coordinates("세종대로 110")
        assert coordinates == (pytest.approx(37.5662952), pytest.approx(126.9779692))

    @patch("jobmatch.services.geocoding_service.requests.get")
    def test_empty_result(self, mock_get):
        mock_get.return_value = mock_response({"addresses": []})
        service = GeocodingService("key-id", "key")
        assert service.search_address("없는 주소") == []
        assert service.get_coordinates("없는 주소") is None

    @patch("jobmatch.services.geocoding_service.requests.get")
    def test_timeout(self, mock_get):
        mock_get.side_effect = requests.exceptions.Timeout()
        with pytest.raises(GeocodingError):
            GeocodingService("key-id", "key").search_address("세종대로 110")

    @patch("jobmatch.services.geocoding_service.requests.get")
    def test_http_error(self, mock_get):
        mock_get.return_value = mock_response(status_error=requests.exceptions.HTTPError("401"))
        service = GeocodingService("key-id", "key")
        with pytest.raises(GeocodingError):
            service.search_address("세종대로 110")
        assert service.get_coordinates("세종대로 110") is None

    @pytest.mark.parametrize("payload", [
        [{"x": "126.97", "y": "37.56"}],
        "error",
        {"addresses": "none"},
    ])
    @patch("jobmatch.services.geocoding_service.requests.get")
    def test_unexpected_response_shape(self, mock_get, payload):
        mock_get.return_value = mock_response(payload)
        service = GeocodingService("key-id", "key")
        with pytest.raises(GeocodingError):
            service.search_address("세종대로 110")
        assert service.get_coordinates("세종대로 110") is None

    @patch("jobmatch.services.geocoding_service.requests.get")
    def test_job_post_created_without_coordinates_on_bad_response(self, mock_get):
        mock_get.return_value = mock_response(["unexpected"])
        service = JobPostService(geocoding_service=GeocodingService("key-id", "key"))

        job_post = service.create_job_post(CreateJobPostRequest(
            employer_id="E1", title="櫃檯人員", location="세종대로 110"
        ))

        assert job_post.latitude is None
        assert job_post.longitude is None

    @patch("jobmatch.services.geocoding_service.requests.get")
    def test_invalid_json(self, mock_get):
        mock_get.return_value = mock_response(json_error=ValueError("not json"))
        with pytest.raises(GeocodingError):
            GeocodingService("key-id", "key").search_address("세종대로 110")
