"""
ロケール別サブドメインのURL解決サービス
"""
import logging
import re
from typing import Any, Dict, Mapping, Optional

from ..models.url_components import URLComponents
from ..utils.result import Result
from ..utils.url_utils import assemble, disassemble
from .collaborators import (
    CurrentRequestInfo,
    LocaleConfig,
    LocaleProvider,
    RouteNameCatalog,
    Router,
)

logger = logging.getLogger(__name__)

# 値が渡されなかった任意パラメータ "/{name?}" の除去
OPTIONAL_SEGMENT_PATTERN = re.compile(r"/\{[^)]+\?\}")


class LocalizedURLError(Exception):
    """ローカライズURL解決エラー"""
    pass


class RouteNotFoundError(LocalizedURLError):
    """指定ロケールにルートの翻訳が存在しない"""
    pass


class NoCurrentRouteError(LocalizedURLError):
    """現在マッチしているルートが存在しない"""
    pass


class LocalizedURLResolver:
    """
    ルート名とロケールから、ロケールのサブドメイン上の完全なURLを解決する

    1リクエストにつき1インスタンスを生成すること。
    現在のURLの解析結果とルート名インデックスはインスタンスに保持される。
    """

    def __init__(
        self,
        request_info: CurrentRequestInfo,
        router: Router,
        catalog: RouteNameCatalog,
        locale_config: LocaleConfig,
        locale_provider: LocaleProvider,
    ) -> None:
        """
        Args:
            request_info: 現在のリクエスト情報
            router: 現在のルート情報
            catalog: ルート名の翻訳カタログ
            locale_config: ドメインとサブドメイン別名
            locale_provider: 利用可能なロケール一覧
        """
        self.request_info = request_info
        self.router = router
        self.catalog = catalog
        self.locale_config = locale_config
        self.locale_provider = locale_provider

        # {ルート名: パステンプレート} resolve() で解決したものだけが入る
        self.translated_routes: Dict[str, str] = {}
        self._parsed_url: Optional[URLComponents] = None

    def reset(self) -> None:
        """リクエスト単位の状態を破棄"""
        self.translated_routes = {}
        self._parsed_url = None

    def get_redirect_url(self) -> str:
        """
        現在のURLのホストだけをロケールのサブドメインに置き換えたURL

        Returns:
            str: 例 "http://example.com/about?x=1" → "http://german.example.com/about?x=1"
        """
        parsed_url = disassemble(self.request_info.full_url())
        locale = self.alias_locale(self.request_info.active_locale())
        return assemble(parsed_url.replace(host=f"{locale}.{self.get_domain()}"))

    def current(self, locale: str) -> Result[str, LocalizedURLError]:
        """現在のルートを指定ロケールのURLに変換"""
        route_name = self.current_route_name()
        if not route_name.is_success:
            return route_name

        attributes = self.current_route_attributes()
        return self.url(route_name.data, attributes.unwrap_or(None), locale)

    def get_current_versions(self, exclude_current_locale: bool = True) -> Dict[str, str]:
        """
        現在のルートの全ロケール版URL（言語切り替え用）

        Args:
            exclude_current_locale: 現在のロケールを除外するか

        Returns:
            Dict[str, str]: {ロケール: URL}。解決できないロケールは含まない
        """
        versions: Dict[str, str] = {}
        active_locale = self.request_info.active_locale()

        for locale in self.locale_provider.available_locales():
            if exclude_current_locale and locale == active_locale:
                continue

            result = self.current(locale)
            if result.is_success:
                versions[locale] = result.data
            else:
                logger.debug("ロケール %s の現在のURLを省略: %s", locale, result.error)

        return versions

    def url(
        self,
        route_name: str,
        attributes: Optional[Mapping[str, Any]] = None,
        locale: Optional[str] = None,
    ) -> Result[str, RouteNotFoundError]:
        """
        ルート名からロケール別の完全なURLを解決

        Args:
            route_name: ルート名 (例: "routes.about")
            attributes: パスパラメータ (例: {"id": 42})
            locale: ロケール。未指定の場合は現在のロケール

        Returns:
            Result[str, RouteNotFoundError]:
                成功時: "http://german.example.com/ueber-uns" 形式のURL
                失敗時: 翻訳が存在しない

        Raises:
            MalformedURLError: 現在のリクエストURLが解析できない場合
        """
        if not locale:
            locale = self.request_info.active_locale()

        if self._parsed_url is None:
            self._parse_current_url()

        path = self.find_route_path_by_name(route_name, locale)
        if not path.is_success:
            return path
        if not path.data:
            # 空の翻訳は未翻訳として扱う
            return Result.failure(RouteNotFoundError(f"{route_name} has an empty path for {locale}"))

        route_path = path.data
        if attributes is not None:
            route_path = self.substitute_attributes(attributes, route_path)

        parsed_url = self._parsed_url.replace(
            host=f"{self.alias_locale(locale)}.{self.get_domain()}",
            path=route_path,
        )
        return Result.success(assemble(parsed_url))

    def resolve(self, route_name: str) -> Result[str, RouteNotFoundError]:
        """
        現在のロケールでルート名をパステンプレートに解決し、逆引き用に記録

        初回の解決結果のみを記録し、以降は上書きしない。
        """
        route_path = self.find_route_path_by_name(route_name)

        if route_path.is_success and route_name not in self.translated_routes:
            self.translated_routes[route_name] = route_path.data

        return route_path

    def current_route_name(self) -> Result[str, NoCurrentRouteError]:
        """
        現在のルート名

        ルーターが名前を返せばそれを使い、なければマッチしたURIを
        resolve() 済みのルートから逆引きする。
        """
        route_name = self.router.current_route_name()
        if route_name:
            return Result.success(route_name)

        match = self.router.current_match()
        if match is not None:
            found = self.find_route_name_by_path(match.uri())
            if found.is_success:
                return found
            return Result.failure(NoCurrentRouteError(f"Unnamed route: {match.uri()}"))

        return Result.failure(NoCurrentRouteError("No route is currently matched"))

    def current_route_attributes(self) -> Result[Dict[str, Any], NoCurrentRouteError]:
        """現在のルートのパラメータ（None の値は除外）"""
        match = self.router.current_match()
        if match is None:
            return Result.failure(NoCurrentRouteError("No route is currently matched"))
        return Result.success(match.parameters_without_nulls())

    def find_route_name_by_path(self, route_path: str) -> Result[str, RouteNotFoundError]:
        """resolve() 済みのルートからパスが完全一致する最初のルート名を探す"""
        for name, path in self.translated_routes.items():
            if route_path == path:
                return Result.success(name)

        return Result.failure(RouteNotFoundError(f"No resolved route for path: {route_path}"))

    def find_route_path_by_name(
        self, route_name: str, locale: Optional[str] = None
    ) -> Result[str, RouteNotFoundError]:
        """
        ルート名のパステンプレートを翻訳カタログから取得

        Args:
            route_name: ルート名
            locale: ロケール。未指定の場合は現在のロケール
        """
        locale = locale or self.request_info.active_locale()

        if self.catalog.has(route_name, locale):
            route_path = self.catalog.translate(route_name, locale)
            logger.debug("ルート解決: %s (locale=%s) → %s", route_name, locale, route_path)
            return Result.success(route_path)

        logger.warning("ルートの翻訳が見つかりません: %s (locale=%s)", route_name, locale)
        return Result.failure(RouteNotFoundError(f"{route_name} is not translated for {locale}"))

    def substitute_attributes(self, attributes: Mapping[str, Any], route: str) -> str:
        """
        パステンプレートのパラメータを置換

        Args:
            attributes: {パラメータ名: 値}
            route: パステンプレート (例: "/posts/{id}/{slug?}")

        Returns:
            str: 置換後のパス。値のない任意パラメータはスラッシュごと除去

        Examples:
            >>> resolver.substitute_attributes({"id": 42}, "/posts/{id}/{slug?}")
            "/posts/42"
        """
        for key, value in attributes.items():
            route = route.replace("{" + str(key) + "}", str(value))
            route = route.replace("{" + str(key) + "?}", str(value))

        return OPTIONAL_SEGMENT_PATTERN.sub("", route)

    def get_domain(self) -> str:
        """設定されたベースドメイン"""
        return self.locale_config.domain()

    def alias_locale(self, locale: str) -> str:
        """
        ロケールに別名があれば別名を返す

        Args:
            locale: 正規ロケール (例: "de")

        Returns:
            str: 別名 (例: "german")。別名がなければ locale のまま
        """
        for alias, canonical in self.locale_config.aliases().items():
            if canonical == locale:
                if alias:
                    return alias
                break

        return locale

    def _parse_current_url(self) -> None:
        """現在のURLからパス・クエリ・フラグメントを除き、ホストをベースドメインにして保持"""
        parsed_url = disassemble(self.request_info.full_url())
        self._parsed_url = parsed_url.without("path", "query", "fragment").replace(
            host=self.get_domain()
        )
        logger.debug("現在のURLを解析しました: %s", self._parsed_url)


def create_resolver(
    request_info: CurrentRequestInfo,
    router: Router,
    catalog: RouteNameCatalog,
    locale_config: LocaleConfig,
    locale_provider: Optional[LocaleProvider] = None,
) -> LocalizedURLResolver:
    """
    リクエスト単位の LocalizedURLResolver を生成

    locale_provider を省略した場合、locale_config が LocaleProvider を
    実装していればそれを使う。
    """
    if locale_provider is None:
        if not isinstance(locale_config, LocaleProvider):
            raise TypeError("locale_provider is required when locale_config does not provide locales")
        locale_provider = locale_config

    return LocalizedURLResolver(request_info, router, catalog, locale_config, locale_provider)
