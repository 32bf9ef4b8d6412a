"""
ローカライズ設定管理
"""
import logging
import os
from typing import Dict, Iterable, List, Optional

from babel import Locale, UnknownLocaleError
from dotenv import load_dotenv

from .services.collaborators import LocaleConfig, LocaleProvider

# 環境変数を読み込み
load_dotenv()

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """ローカライズ設定エラー"""
    pass


class Config:
    """ローカライズ設定クラス"""

    # ベースドメイン (例: example.com → german.example.com)
    LOCALIZATION_DOMAIN = os.getenv('LOCALIZATION_DOMAIN', 'localhost')

    # サブドメイン別名 "alias=locale,alias=locale" (例: german=de,french=fr)
    LOCALIZATION_ALIASES = os.getenv('LOCALIZATION_ALIASES', '')

    # 利用可能なロケール "en,de"
    LOCALIZATION_LOCALES = os.getenv('LOCALIZATION_LOCALES', 'en')

    # デフォルトロケール
    LOCALIZATION_DEFAULT_LOCALE = os.getenv('LOCALIZATION_DEFAULT_LOCALE', 'en')


def parse_aliases(raw: str) -> Dict[str, str]:
    """
    別名設定文字列を辞書に変換

    Args:
        raw: "german=de,french=fr" 形式の文字列

    Returns:
        Dict[str, str]: {別名: 正規ロケール}

    Raises:
        ConfigurationError: "alias=locale" 形式でないエントリがある場合
    """
    aliases: Dict[str, str] = {}
    for entry in raw.split(','):
        entry = entry.strip()
        if not entry:
            continue

        alias, sep, locale = entry.partition('=')
        alias, locale = alias.strip(), locale.strip()
        if not sep or not alias or not locale:
            raise ConfigurationError(f"Malformed alias entry: {entry}")

        aliases[alias] = locale
    return aliases


def parse_locales(raw: str) -> List[str]:
    """"en,de" 形式の文字列をロケールのリストに変換（重複は除去、順序は保持）"""
    locales: List[str] = []
    for code in raw.split(','):
        code = code.strip()
        if code and code not in locales:
            locales.append(code)
    return locales


def validate_locale_code(code: str) -> None:
    """
    ロケールコードをBabelで検証

    Raises:
        ConfigurationError: Babelが認識できないロケールコードの場合
    """
    sep = '-' if '-' in code else '_'
    try:
        Locale.parse(code, sep=sep)
    except (UnknownLocaleError, ValueError) as e:
        logger.warning("不明なロケールコードを拒否しました: %s", code)
        raise ConfigurationError(f"Unknown locale code: {code}") from e


class EnvLocaleConfig(LocaleConfig, LocaleProvider):
    """環境変数ベースのドメイン・別名・ロケール一覧の提供"""

    def __init__(
        self,
        domain: str,
        aliases: Optional[Dict[str, str]] = None,
        locales: Optional[Iterable[str]] = None,
        default_locale: str = 'en',
    ) -> None:
        """
        Args:
            domain: ベースドメイン (例: "example.com")
            aliases: {サブドメイン別名: 正規ロケール} (例: {"german": "de"})
            locales: 利用可能なロケール
            default_locale: デフォルトロケール
        """
        if not domain:
            raise ConfigurationError("LOCALIZATION_DOMAIN is required")

        self._domain = domain
        self._aliases = dict(aliases or {})
        self._locales = list(locales) if locales is not None else [default_locale]
        self.default_locale = default_locale

        for code in [*self._aliases.values(), *self._locales, default_locale]:
            validate_locale_code(code)

        if default_locale not in self._locales:
            raise ConfigurationError(
                f"Default locale {default_locale} is not in available locales {self._locales}"
            )

    @classmethod
    def from_env(cls) -> 'EnvLocaleConfig':
        """Config の値から生成"""
        return cls(
            domain=Config.LOCALIZATION_DOMAIN,
            aliases=parse_aliases(Config.LOCALIZATION_ALIASES),
            locales=parse_locales(Config.LOCALIZATION_LOCALES),
            default_locale=Config.LOCALIZATION_DEFAULT_LOCALE,
        )

    def domain(self) -> str:
        return self._domain

    def aliases(self) -> Dict[str, str]:
        return dict(self._aliases)

    def available_locales(self) -> List[str]:
        return list(self._locales)

    def canonical_locale(self, label: str) -> str:
        """サブドメイン表記を正規ロケールに戻す (例: "german" → "de")"""
        return self._aliases.get(label, label)


def get_localization_config():
    """ローカライズ設定を取得"""
    return {
        'domain': Config.LOCALIZATION_DOMAIN,
        'aliases': parse_aliases(Config.LOCALIZATION_ALIASES),
        'locales': parse_locales(Config.LOCALIZATION_LOCALES),
        'default_locale': Config.LOCALIZATION_DEFAULT_LOCALE,
    }
