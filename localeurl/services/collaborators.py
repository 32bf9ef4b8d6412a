"""
LocalizedURLResolver が利用する外部コラボレーターのインターフェース

リクエスト・ルーター・翻訳カタログ・設定はすべてコンストラクタで注入し、
グローバルな参照は行わない。
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class CurrentRequestInfo(ABC):
    """現在のリクエスト情報"""

    @abstractmethod
    def full_url(self) -> str:
        """クエリを含む現在のリクエストの完全なURL"""
        pass

    @abstractmethod
    def active_locale(self) -> str:
        """現在有効なロケール (例: "de")"""
        pass


class RouteMatch(ABC):
    """ルーターが現在マッチしているルート"""

    @abstractmethod
    def uri(self) -> str:
        """マッチしたルートの（ローカライズ済み）パステンプレート"""
        pass

    @abstractmethod
    def parameters_without_nulls(self) -> Dict[str, Any]:
        """バインド済みパラメータ（None の値は除外）"""
        pass


class Router(ABC):
    """現在のルート情報を提供するルーター"""

    @abstractmethod
    def current_route_name(self) -> Optional[str]:
        pass

    @abstractmethod
    def current_match(self) -> Optional[RouteMatch]:
        pass


class RouteNameCatalog(ABC):
    """ルート名 → ロケール別パステンプレートの翻訳カタログ"""

    @abstractmethod
    def has(self, name: str, locale: Optional[str] = None) -> bool:
        pass

    @abstractmethod
    def translate(self, name: str, locale: Optional[str] = None) -> str:
        pass


class LocaleConfig(ABC):
    """ドメインとサブドメイン別名の設定"""

    @abstractmethod
    def domain(self) -> str:
        pass

    @abstractmethod
    def aliases(self) -> Dict[str, str]:
        """{サブドメイン別名: 正規ロケール} (例: {"german": "de"})"""
        pass


class LocaleProvider(ABC):
    """利用可能なロケール一覧"""

    @abstractmethod
    def available_locales(self) -> List[str]:
        pass


class StaticRouteMatch(RouteMatch):
    """固定値のルートマッチ"""

    def __init__(self, uri: str, parameters: Optional[Dict[str, Any]] = None) -> None:
        self._uri = uri
        self._parameters = dict(parameters or {})

    def uri(self) -> str:
        return self._uri

    def parameters_without_nulls(self) -> Dict[str, Any]:
        return {key: value for key, value in self._parameters.items() if value is not None}
