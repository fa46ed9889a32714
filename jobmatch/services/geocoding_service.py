"""
Naver Maps Geocoding 服務
"""
import re
from typing import List, Optional, Tuple
import requests

from jobmatch.config import (
    NAVER_MAPS_API_KEY_ID,
    NAVER_MAPS_API_KEY,
    NAVER_GEOCODE_URL,
    GEOCODING_TIMEOUT_SECONDS,
)
from jobmatch.core.logger import setup_logger
from jobmatch.models.schemas import AddressCandidate

# 設置 logger
logger = setup_logger(__name__)

MIN_QUERY_LENGTH = 3
SPECIAL_CHARS = re.compile(r"[%=><]")
SQL_KEYWORDS = [
    "OR", "SELECT", "INSERT", "DELETE", "UPDATE", "CREATE",
    "DROP", "EXEC", "UNION", "FETCH", "DECLARE", "TRUNCATE",
]


class GeocodingError(Exception):
    """地址搜尋失敗（設定錯誤或外部服務錯誤）"""


def validate_search_query(query: Optional[str]) -> Optional[str]:
    """
    檢查地址搜尋字串

    返回:
        Optional[str]: 錯誤訊息，合法時為 None
    """
    if not query or not isinstance(query, str):
        return "請輸入搜尋地址"
    if len(query.strip()) < MIN_QUERY_LENGTH:
        return f"搜尋地址至少需要 {MIN_QUERY_LENGTH} 個字"
    if SPECIAL_CHARS.search(query):
        return "搜尋地址不可包含特殊字元"
    for keyword in SQL_KEYWORDS:
        if re.search(rf"\b{keyword}\b", query, re.IGNORECASE):
            return f"搜尋地址不可包含「{keyword}」等字詞"
    return None


class GeocodingService:
    """Naver Maps Geocoding 服務"""

    def __init__(self, client_id: Optional[str] = None, client_secret: Optional[str] = None):
        """
        初始化地理編碼服務

        參數:
            client_id: Naver Cloud API Key ID（可選，未提供時使用配置中的值）
            client_secret: Naver Cloud API Key（可選，未提供時使用配置中的值）
        """
        self.client_id = client_id or NAVER_MAPS_API_KEY_ID
        self.client_secret = client_secret or NAVER_MAPS_API_KEY
        self.geocoding_url = NAVER_GEOCODE_URL

    @property
    def is_configured(self) -> bool:
        return bool(self.client_id and self.client_secret)

    def search_address(self, query: str) -> List[AddressCandidate]:
        """
        搜尋地址

        參數:
            query: 地址字串（呼叫前應先經 validate_search_query 檢查）

        返回:
            List[AddressCandidate]: 符合的地址（可能為空）

        例外:
            GeocodingError: 未設定金鑰、請求失敗或回應格式錯誤
        """
        if not self.is_configured:
            raise GeocodingError("未設定 NAVER_MAPS_API_KEY_ID / NAVER_MAPS_API_KEY")

        try:
            response = requests.get(
                self.geocoding_url,
                params={"query": query},
                headers={
                    "X-NCP-APIGW-API-KEY-ID": self.client_id,
                    "X-NCP-APIGW-API-KEY": self.client_secret,
                },
                timeout=GEOCODING_TIMEOUT_SECONDS
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.Timeout as e:
            logger.error(f"Geocoding API 逾時：{query}")
            raise GeocodingError("地址搜尋逾時") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Geocoding API 請求錯誤：{e}", exc_info=True)
            raise GeocodingError("地址搜尋服務錯誤") from e
        except ValueError as e:
            logger.error(f"解析 Geocoding 回應錯誤：{e}", exc_info=True)
            raise GeocodingError("地址搜尋回應格式錯誤") from e

        addresses = (data.get("addresses") or []) if isinstance(data, dict) else None
        if not isinstance(addresses, list):
            logger.error(f"Geocoding 回應格式錯誤：{type(data).__name__}")
            raise GeocodingError("地址搜尋回應格式錯誤")

        candidates = []
        for address in addresses:
            if not isinstance(address, dict):
                continue
            try:
                latitude = float(address["y"]) if address.get("y") else None
                longitude = float(address["x"]) if address.get("x") else None
            except (TypeError, ValueError):
                latitude, longitude = None, None
            candidates.append(AddressCandidate(
                road_address=address.get("roadAddress") or None,
                jibun_address=address.get("jibunAddress") or None,
                english_address=address.get("englishAddress") or None,
                latitude=latitude,
                longitude=longitude
            ))

        logger.debug(f"地址搜尋：{query} -> {len(candidates)} 筆")
        return candidates

    def get_coordinates(self, address: str) -> Optional[Tuple[float, float]]:
        """
        根據地址取得經緯度座標

        返回:
            Optional[Tuple[float, float]]: (緯度, 經度) 或 None（如果失敗）
        """
        if not self.is_configured:
            logger.warning("未設定 Naver Maps API 金鑰，無法取得座標")
            return None

        try:
            candidates = self.search_address(address)
        except GeocodingError as e:
            logger.warning(f"無法取得座標：{address} - {e}")
            return None

        for candidate in candidates:
            if candidate.latitude is not None and candidate.longitude is not None:
                return (candidate.latitude, candidate.longitude)

        logger.warning(f"找不到地址座標：{address}")
        return None
