"""
ベースハンドラー - Tornado リクエストと LocalizedURLResolver の接続
"""
import logging
from typing import Dict, Mapping, Optional, Union

import tornado.web

from ..services.collaborators import CurrentRequestInfo, RouteMatch, Router, StaticRouteMatch
from ..services.localized_url_service import LocalizedURLResolver, create_resolver

logger = logging.getLogger(__name__)


class TornadoRequestInfo(CurrentRequestInfo):
    """RequestHandler から現在のリクエスト情報を提供"""

    def __init__(self, handler: "BaseHandler") -> None:
        self.handler = handler

    def full_url(self) -> str:
        return self.handler.request.full_url()

    def active_locale(self) -> str:
        return self.handler.current_locale


class TornadoRouter(Router):
    """
    RequestHandler から現在のルート情報を提供

    ハンドラーのクラス属性 route_name / route_path と、
    URLパターンで取得した path_kwargs を使う。
    route_path が {ロケール: テンプレート} の場合は現在のロケールのテンプレートを使う。
    """

    def __init__(self, handler: "BaseHandler") -> None:
        self.handler = handler

    def current_route_name(self) -> Optional[str]:
        return self.handler.route_name

    def current_match(self) -> Optional[RouteMatch]:
        route_path = self.handler.route_path
        if route_path is None and self.handler.route_name is None:
            return None

        if isinstance(route_path, Mapping):
            route_path = route_path.get(self.handler.current_locale)
        return StaticRouteMatch(route_path or "", self.handler.path_kwargs)


class BaseHandler(tornado.web.RequestHandler):
    """
    ベースハンドラー - ロケール別サブドメインのURL解決機能を提供

    Application に localization_config (EnvLocaleConfig) と
    route_catalog (RouteNameCatalog) が登録されている必要がある。
    """

    # ルート名 (例: "routes.about")。None の場合は route_path から逆引き
    route_name: Optional[str] = None
    # ローカライズ済みパステンプレート (例: "/ueber-uns/{slug?}")
    # またはロケール別の {"en": "/about/{slug?}", "de": "/ueber-uns/{slug?}"}
    route_path: Optional[Union[str, Mapping[str, str]]] = None

    current_locale: str
    resolver: LocalizedURLResolver

    async def prepare(self) -> None:
        """
        全リクエスト前に実行されるフック

        ホストのサブドメインからロケールを決定し、リクエスト単位の
        resolver を生成する。サブドメインにロケールがなければ
        redirect_to_locale 設定に従ってロケール付きホストへリダイレクトする。
        """
        config = self.application.localization_config
        detected = self._detect_locale_from_host()
        self.current_locale = detected or config.default_locale

        self.resolver = create_resolver(
            TornadoRequestInfo(self),
            TornadoRouter(self),
            self.application.route_catalog,
            config,
        )

        # ルート登録時と同様に resolve() してパスからの逆引きを可能にする
        for route_name in self.settings.get("localized_routes", ()):
            self.resolver.resolve(route_name)

        if detected is None and self.settings.get("redirect_to_locale", False):
            redirect_url = self.resolver.get_redirect_url()
            logger.info("ロケール付きホストへリダイレクト: %s", redirect_url)
            self.redirect(redirect_url)

    def _detect_locale_from_host(self) -> Optional[str]:
        """
        ホスト名のサブドメインからロケールを取得

        Returns:
            str | None: 利用可能なロケール。該当しなければ None
        """
        config = self.application.localization_config
        host_name = self.request.host_name
        suffix = "." + config.domain()

        if not host_name.endswith(suffix):
            return None

        locale = config.canonical_locale(host_name[:-len(suffix)])
        if locale in config.available_locales():
            return locale

        logger.debug("サブドメインのロケールが利用できません: %s", host_name)
        return None

    def localized_url(self, route_name: str, attributes: Optional[Dict] = None,
                      locale: Optional[str] = None) -> Optional[str]:
        """ルート名のロケール別URL。解決できなければ None"""
        return self.resolver.url(route_name, attributes, locale).unwrap_or(None)

    def get_template_namespace(self) -> dict:  # type: ignore
        """
        テンプレートに渡すコンテキスト変数

        Returns:
            dict: テンプレート変数
                - current_locale: 現在のロケール
                - localized_url: ルート名 → URL 関数
                - current_versions: {ロケール: 現在のページのURL}
        """
        namespace = super().get_template_namespace()
        namespace.update(
            {
                "current_locale": self.current_locale,
                "localized_url": self.localized_url,
                "current_versions": self.resolver.get_current_versions(),
            }
        )
        return namespace
