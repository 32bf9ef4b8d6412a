"""
Result型による解決結果の表現

ルートが見つからない等の「想定内の失敗」は例外ではなくこの型で返す。
"""
from typing import Generic, Optional, TypeVar

T = TypeVar('T')
E = TypeVar('E')


class Result(Generic[T, E]):
    """操作結果を表現するクラス"""

    def __init__(self, data: Optional[T] = None, error: Optional[E] = None, is_success: bool = True):
        self.data = data
        self.error = error
        self.is_success = is_success

    @classmethod
    def success(cls, data: T) -> 'Result[T, E]':
        """成功結果を作成"""
        return cls(data=data, is_success=True)

    @classmethod
    def failure(cls, error: E) -> 'Result[T, E]':
        """失敗結果を作成"""
        return cls(error=error, is_success=False)

    def unwrap_or(self, default):
        """成功時は値を、失敗時は default を返す"""
        return self.data if self.is_success else default

    def __repr__(self) -> str:
        if self.is_success:
            return f"Result.success({self.data!r})"
        return f"Result.failure({self.error!r})"
