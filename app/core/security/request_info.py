"""
リクエストからクライアント情報を取り出すヘルパー
エッジフィルタ・レート制限・監査ログで共通利用する
"""

from typing import Optional
from starlette.requests import HTTPConnection

UNKNOWN_CLIENT = "unknown"


def get_client_ip(request: HTTPConnection) -> str:
    """クライアントのIPアドレスを取得（プロキシ経由の場合は転送元を優先）"""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        ip = forwarded_for.split(",")[0].strip()
        if ip:
            return ip

    real_ip = request.headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()

    # クライアントの直接IP
    if request.client and request.client.host:
        return request.client.host

    return UNKNOWN_CLIENT


def get_user_agent(request: HTTPConnection) -> str:
    """User-Agentを取得（未指定の場合は空文字）"""
    return request.headers.get("user-agent", "")


def get_raw_path(request: HTTPConnection) -> str:
    """パーセントエンコードを保ったままのパスを取得"""
    raw: Optional[bytes] = request.scope.get("raw_path")
    if raw:
        return raw.decode("latin-1").split("?", 1)[0]
    return request.url.path
