"""
URL構成要素データモデル
"""
from dataclasses import dataclass, fields, replace
from typing import Optional


@dataclass(frozen=True)
class URLComponents:
    """
    URLの構成要素

    None は「出力しない」、空文字は「空の値として存在する」を意味する。
    password は parse_url 由来の "pass" に相当する。
    """
    scheme: Optional[str] = None
    host: Optional[str] = None
    port: Optional[int] = None
    user: Optional[str] = None
    password: Optional[str] = None
    path: Optional[str] = None
    query: Optional[str] = None
    fragment: Optional[str] = None

    def replace(self, **changes) -> 'URLComponents':
        """指定フィールドを差し替えたコピーを返す"""
        return replace(self, **changes)

    def without(self, *names: str) -> 'URLComponents':
        """指定フィールドを取り除いた（None にした）コピーを返す"""
        return replace(self, **{name: None for name in names})

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

