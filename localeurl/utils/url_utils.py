"""
URLの分解・再構築ユーティリティ
"""
import re
from urllib.parse import urlsplit

from ..models.url_components import URLComponents


# スキームなしの "host:port" 形式 (例: "localhost:8202/about")
_HOST_PORT_PATTERN = re.compile(r"^[^:/?#\[\]@]+:(\d+)")
_MAX_PORT = 65535


class MalformedURLError(ValueError):
    """URLとして解釈できない文字列"""
    pass


def disassemble(full_url: str) -> URLComponents:
    """
    URL文字列を構成要素に分解

    Args:
        full_url: 対象URL (例: "https://user:pw@example.com:8443/about?x=1#top")

    Returns:
        URLComponents: 存在する要素のみが設定された構成要素

    Raises:
        MalformedURLError: URLとして解釈できない場合

    Notes:
        - スキームとホストの大文字小文字は保持する
        - "?" / "#" が存在すれば空でも query / fragment を "" として保持する
        - スキームなしの "host:port" はポートが 0-65535 の場合のみホストとポートとして扱う
          ("tel:5551234" はスキームとパス。ただし "tel:911" は host:port と解釈される)
    """
    if not isinstance(full_url, str):
        raise MalformedURLError(f"URL must be a string, got {type(full_url).__name__}")

    candidate = full_url
    host_port = _HOST_PORT_PATTERN.match(full_url)
    if host_port and int(host_port.group(1)) <= _MAX_PORT:
        candidate = "//" + full_url

    try:
        parts = urlsplit(candidate)
        port = parts.port
    except ValueError as e:
        raise MalformedURLError(f"Malformed URL {full_url!r}: {e}") from e

    scheme = None
    rest = candidate
    if parts.scheme:
        # urlsplit はスキームを小文字化するため元の表記を使う
        prefix = candidate[:len(parts.scheme)]
        scheme = prefix if prefix.lower() == parts.scheme else parts.scheme
        rest = candidate[len(parts.scheme) + 1:]

    if rest.startswith("//") and not parts.netloc:
        raise MalformedURLError(f"Malformed URL {full_url!r}: empty authority")

    user = password = None
    userinfo, at, hostinfo = parts.netloc.rpartition("@")
    if at:
        user, colon, secret = userinfo.partition(":")
        if colon:
            password = secret

    before_fragment, hash_mark, _ = candidate.partition("#")

    return URLComponents(
        scheme=scheme,
        host=_extract_host(hostinfo) or None,
        port=port,
        user=user,
        password=password,
        path=parts.path or None,
        query=parts.query if "?" in before_fragment else None,
        fragment=parts.fragment if hash_mark else None,
    )


def _extract_host(hostinfo: str) -> str:
    """"host:port" 部分からホストのみを取り出す（IPv6の角括弧は保持）"""
    if hostinfo.startswith("["):
        end = hostinfo.find("]")
        return hostinfo[:end + 1]
    return hostinfo.partition(":")[0]


def assemble(components: URLComponents) -> str:
    """
    構成要素からURL文字列を再構築

    Args:
        components: URL構成要素

    Returns:
        str: 再構築したURL。全要素が欠けている場合は空文字

    Rules:
        - ユーザー情報は host[:port] の後ろに出力する（password が存在すれば
          空でも ":" を出力し、user か password があれば "@" を付ける）
        - パスより前に何か出力済みなら "/" + 先頭スラッシュを除いたパス
        - 何も出力されていなければパスをそのまま出力（相対パスのまま）
    """
    if components is None or components.is_empty():
        return ""

    url = ""
    if components.scheme is not None:
        url += f"{components.scheme}://"
    if components.host is not None:
        url += components.host
    if components.port is not None:
        url += f":{components.port}"

    user = components.user if components.user is not None else ""
    password = f":{components.password}" if components.password is not None else ""
    url += user + (f"{password}@" if (user or password) else "")

    if components.path is not None:
        if url:
            url += "/" + components.path.lstrip("/")
        else:
            url += components.path

    if components.query is not None:
        url += f"?{components.query}"
    if components.fragment is not None:
        url += f"#{components.fragment}"

    return url
