"""
ルート名の翻訳カタログ（メモリ内）
"""
import logging
from typing import Any, Dict, Optional

from .collaborators import RouteNameCatalog

logger = logging.getLogger(__name__)


class RouteCatalogService(RouteNameCatalog):
    """ロケール別のルートパステンプレートを保持する翻訳カタログ"""

    def __init__(
        self,
        routes: Optional[Dict[str, Dict[str, Any]]] = None,
        fallback_locale: Optional[str] = None,
    ) -> None:
        """
        Args:
            routes: {ロケール: ネストされた翻訳辞書}
                例: {"de": {"routes": {"about": "/ueber-uns"}}}
            fallback_locale: locale 未指定時に使うロケール
        """
        self.routes: Dict[str, Dict[str, Any]] = dict(routes or {})
        self.fallback_locale = fallback_locale

    def add_routes(self, locale: str, routes: Dict[str, Any]) -> None:
        """ロケールの翻訳辞書を追加（既存キーは上書き）"""
        self.routes.setdefault(locale, {}).update(routes)

    def has(self, name: str, locale: Optional[str] = None) -> bool:
        """
        翻訳キーが存在するかを判定

        Args:
            name: ルート名 (例: "routes.about")
            locale: ロケール。None の場合は fallback_locale

        Returns:
            bool: 文字列の翻訳が存在する場合 True
        """
        return self._lookup(name, locale) is not None

    def translate(self, name: str, locale: Optional[str] = None) -> str:
        """
        ルート名をパステンプレートに翻訳

        Raises:
            KeyError: 翻訳が存在しない場合（呼び出し側は has() で確認すること）
        """
        value = self._lookup(name, locale)
        if value is None:
            raise KeyError(f"{name} ({locale or self.fallback_locale})")
        return value

    def _lookup(self, name: str, locale: Optional[str]) -> Optional[str]:
        locale = locale or self.fallback_locale
        if not name or locale is None:
            return None

        translations = self.routes.get(locale, {})

        # フラットなキー ("about.page") を優先し、次にネストされたキー
        value = translations.get(name)
        if not isinstance(value, str):
            value = self._get_nested_value(translations, name.split("."))
        if value is None:
            logger.debug("ルート翻訳が見つかりません: %s (locale=%s)", name, locale)
        return value

    def _get_nested_value(self, data: Dict[str, Any], keys: list[str]) -> Optional[str]:
        """
        ネストされた辞書から値を取得

        Args:
            data: 辞書データ
            keys: キーのリスト

        Returns:
            str | None: 見つかった値、または None
        """
        current: Any = data
        for k in keys:
            if isinstance(current, dict) and k in current:
                current = current[k]
            else:
                return None
        return current if isinstance(current, str) else None
