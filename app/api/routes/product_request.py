# app/api/routes/product_request.py
"""
 - 新着商品の追加リクエストAPIルートを定義するモジュール。
 - 入力は必ず検査ゲート（screened_body）を通過したものだけを保存する。
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.crud.product_request import create_product_request
from app.db.session import get_db
from app.schemas.product_request import ProductRequestCreate
from app.core.security.audit import AuditEventType, AuditStatus, dispatch_security_event
from app.core.security.threat import ScreenedPayload, screened_body

# ロガーの設定
logger = logging.getLogger(__name__)

# FastAPIのルーターを初期化
router = APIRouter(tags=["ProductRequests"])


# 新着商品の追加リクエスト
@router.post("/request")
def submit_product_request(
    request: Request,
    payload: ScreenedPayload = Depends(screened_body("product_request")),
    db: Session = Depends(get_db),
):
    try:
        ProductRequestCreate.model_validate(payload.data)
    except ValidationError as e:
        logger.debug(f"追加リクエストの入力不正: {e.error_count()}件")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="名前・連絡先・商品名は必須です",
        )

    product_request = create_product_request(db, payload)
    dispatch_security_event(
        AuditEventType.DATA_CREATE,
        AuditStatus.SUCCESS,
        resource="product_request",
        action="create",
        request=request,
        details={"id": product_request.id, "warnings": len(payload.findings)},
    )
    return {"success": True}
