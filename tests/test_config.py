"""
ローカライズ設定のユニットテスト
"""
import pytest

from localeurl.config import (
    Config,
    ConfigurationError,
    EnvLocaleConfig,
    get_localization_config,
    parse_aliases,
    parse_locales,
)


class TestParseSettings:
    """環境変数文字列の解析テスト"""

    def test_parse_aliases(self) -> None:
        """別名設定を辞書に変換"""
        assert parse_aliases("german=de, french=fr") == {"german": "de", "french": "fr"}

    def test_parse_aliases_empty(self) -> None:
        """空文字は空の辞書"""
        assert parse_aliases("") == {}
        assert parse_aliases(" , ") == {}

    @pytest.mark.parametrize("raw", ["german", "german=", "=de"])
    def test_parse_aliases_malformed(self, raw: str) -> None:
        """不正な別名エントリはエラー"""
        with pytest.raises(ConfigurationError):
            parse_aliases(raw)

    def test_parse_locales_deduplicates(self) -> None:
        """重複と空要素を除去し順序を保持"""
        assert parse_locales("en, de,en,") == ["en", "de"]


class TestEnvLocaleConfig:
    """EnvLocaleConfig のテストクラス"""

    @pytest.fixture
    def config(self) -> EnvLocaleConfig:
        return EnvLocaleConfig(
            domain="example.com",
            aliases={"german": "de"},
            locales=["en", "de", "fr"],
            default_locale="en",
        )

    def test_accessors(self, config: EnvLocaleConfig) -> None:
        """ドメイン・別名・ロケール一覧の取得"""
        assert config.domain() == "example.com"
        assert config.aliases() == {"german": "de"}
        assert config.available_locales() == ["en", "de", "fr"]

    def test_aliases_returns_copy(self, config: EnvLocaleConfig) -> None:
        """返された辞書を変更しても設定は変わらない"""
        config.aliases()["french"] = "fr"
        assert config.aliases() == {"german": "de"}

    def test_canonical_locale(self, config: EnvLocaleConfig) -> None:
        """サブドメイン表記を正規ロケールに戻す"""
        assert config.canonical_locale("german") == "de"
        assert config.canonical_locale("fr") == "fr"

    def test_unknown_alias_target_rejected(self) -> None:
        """Babelが認識しないロケールへの別名はエラー"""
        with pytest.raises(ConfigurationError):
            EnvLocaleConfig(domain="example.com", aliases={"de": "german"}, locales=["en"])

    def test_unknown_locale_rejected(self) -> None:
        """Babelが認識しないロケールはエラー"""
        with pytest.raises(ConfigurationError):
            EnvLocaleConfig(domain="example.com", locales=["en", "klingon"])

    def test_default_locale_must_be_available(self) -> None:
        """デフォルトロケールは利用可能なロケールに含まれる必要がある"""
        with pytest.raises(ConfigurationError):
            EnvLocaleConfig(domain="example.com", locales=["de"], default_locale="en")

    def test_domain_required(self) -> None:
        """ドメインは必須"""
        with pytest.raises(ConfigurationError):
            EnvLocaleConfig(domain="")

    def test_region_locale_accepted(self) -> None:
        """地域付きロケールも受け付ける"""
        config = EnvLocaleConfig(domain="example.com", locales=["en", "pt-BR", "zh_Hant"])
        assert config.available_locales() == ["en", "pt-BR", "zh_Hant"]

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Config の値から生成"""
        monkeypatch.setattr(Config, "LOCALIZATION_DOMAIN", "example.org")
        monkeypatch.setattr(Config, "LOCALIZATION_ALIASES", "german=de")
        monkeypatch.setattr(Config, "LOCALIZATION_LOCALES", "en,de")
        monkeypatch.setattr(Config, "LOCALIZATION_DEFAULT_LOCALE", "de")

        config = EnvLocaleConfig.from_env()

        assert config.domain() == "example.org"
        assert config.aliases() == {"german": "de"}
        assert config.available_locales() == ["en", "de"]
        assert config.default_locale == "de"

    def test_get_localization_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """設定の辞書表現"""
        monkeypatch.setattr(Config, "LOCALIZATION_DOMAIN", "example.org")
        monkeypatch.setattr(Config, "LOCALIZATION_ALIASES", "")
        monkeypatch.setattr(Config, "LOCALIZATION_LOCALES", "en")
        monkeypatch.setattr(Config, "LOCALIZATION_DEFAULT_LOCALE", "en")

        assert get_localization_config() == {
            "domain": "example.org",
            "aliases": {},
            "locales": ["en"],
            "default_locale": "en",
        }
