from fastapi import FastAPI
import logging
from app.api.routes import auth, product_request, security_status
from app.core.config import get_settings
from app.core.security.otp import otp_router
from app.core.security.perimeter import EdgeRequestFilter
from app.core.security.sweeper import build_default_sweeper
from app.db.database import init_db

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

# ロガーの設定
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name)

# エッジリクエストフィルタ（全リクエストに適用）
app.add_middleware(EdgeRequestFilter)

logger.info(f"環境: {settings.environment}")

# 定期スイープ（レート制限・OTP・ブロックリスト）
sweeper = build_default_sweeper()

@app.on_event("startup")
async def startup_event():
    init_db()
    if settings.background_sweeps_enabled:
        sweeper.start()
    logger.info(f"起動完了: sweeps={settings.background_sweeps_enabled}")

@app.on_event("shutdown")
async def shutdown_event():
    if sweeper.running:
        sweeper.stop()

""" ----------
 ルーター登録
---------- """
# ログイン入力検証API
app.include_router(auth.router, prefix="/api")

# 二要素認証API（OTP・バックアップコード）
app.include_router(otp_router, prefix="/api")

# 新着商品の追加リクエストAPI
app.include_router(product_request.router, prefix="/api")

# セキュリティ状況確認API
app.include_router(security_status.router, prefix="/api")


@app.get("/")
def root():
    return {"message": settings.app_name}

@app.get("/health")
def health():
    return {"status": "ok"}
