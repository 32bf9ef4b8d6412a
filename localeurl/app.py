"""
Tornado アプリケーションへのローカライズサービス登録
"""
import logging
from typing import Iterable, Optional

import tornado.web

from .config import EnvLocaleConfig
from .services.collaborators import RouteNameCatalog
from .services.route_catalog_service import RouteCatalogService

logger = logging.getLogger(__name__)


def setup_localization(
    app: tornado.web.Application,
    locale_config: Optional[EnvLocaleConfig] = None,
    catalog: Optional[RouteNameCatalog] = None,
    route_names: Iterable[str] = (),
    redirect_to_locale: bool = False,
) -> tornado.web.Application:
    """
    アプリケーションにローカライズ設定とルートカタログを登録

    Args:
        app: Tornadoアプリケーション
        locale_config: ドメイン・別名・ロケール設定。None の場合は環境変数から生成
        catalog: ルート名の翻訳カタログ。None の場合は空のカタログ
        route_names: リクエストごとに resolve() するルート名（パスからの逆引き用）
        redirect_to_locale: ロケールのないホストをロケール付きホストへリダイレクトするか

    Returns:
        tornado.web.Application: 登録済みのアプリケーション
    """
    if locale_config is None:
        locale_config = EnvLocaleConfig.from_env()
    if catalog is None:
        catalog = RouteCatalogService(fallback_locale=locale_config.default_locale)

    app.localization_config = locale_config
    app.route_catalog = catalog
    app.settings["localized_routes"] = list(route_names)
    app.settings["redirect_to_locale"] = redirect_to_locale

    logger.info(
        "ローカライズサービスを登録しました: domain=%s, locales=%s",
        locale_config.domain(),
        locale_config.available_locales(),
    )
    return app
