import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from diet.domain.DietList import DietList
from diet.infra.DietList_Repository import DietListRepository
from diet.logic.codec.plan_codec import decode, encode, is_weekly_content, split_days
from diet.utilities.constants import DIET_TEMPLATE, MODE_DAILY, MODE_WEEKLY
from diet.utilities.text import diet_list_message, whatsapp_url
from diet.utilities.timeutils import format_turkish_date
from diet.utilities.validators import DecodeInput, DietListInput, PlanDocumentInput

router = APIRouter()
logger = logging.getLogger(__name__)


def _serialize(diet_list: DietList):
    doc = diet_list.document()
    data = diet_list.to_dict()
    data["document"] = doc.to_dict()
    if doc.is_weekly:
        data["days"] = [{"day": day, "content": content} for day, content in split_days(diet_list.content)]
    return data


def _body_to_content(payload: DietListInput):
    '''Returns (content, mode); structured plans are encoded and keep their explicit mode.'''
    if payload.plan is not None:
        doc = payload.plan.to_domain()
        return encode(doc), doc.mode
    # raw text: the stored mode is inferred once, at write time
    return payload.content, MODE_WEEKLY if is_weekly_content(payload.content) else MODE_DAILY


# === Codec ===
@router.post("/api/diet-plans/encode")
def api_encode(payload: PlanDocumentInput):
    return {"content": encode(payload.to_domain())}


@router.post("/api/diet-plans/decode")
def api_decode(payload: DecodeInput):
    return decode(payload.content, payload.mode).to_dict()


@router.get("/api/diet-plans/template")
def api_template():
    return {"title": format_turkish_date(), "content": DIET_TEMPLATE}


# === Diet lists ===
@router.get("/api/clients/{client_id}/diet-lists")
def list_diet_lists(client_id: str):
    lists = DietListRepository().list_for_client(client_id)
    return {"items": [_serialize(d) for d in lists], "count": len(lists)}


@router.post("/api/clients/{client_id}/diet-lists", status_code=201)
def create_diet_list(client_id: str, payload: DietListInput):
    content, mode = _body_to_content(payload)
    if not content:
        raise HTTPException(status_code=400, detail="Diet list content is empty")
    diet_list = DietList(
        client_id=client_id,
        dietitian_id=payload.dietitian_id,
        title=payload.title or format_turkish_date(),
        content=content,
        mode=mode,
    )
    DietListRepository().add(diet_list)
    logger.info("Diet list %s created for client %s", diet_list.id, client_id)
    return _serialize(diet_list)


def _get_or_404(repo: DietListRepository, list_id: str) -> DietList:
    diet_list = repo.get(list_id)
    if diet_list is None:
        raise HTTPException(status_code=404, detail="Diet list not found")
    return diet_list


@router.get("/api/diet-lists/{list_id}")
def get_diet_list(list_id: str):
    return _serialize(_get_or_404(DietListRepository(), list_id))


@router.put("/api/diet-lists/{list_id}")
def update_diet_list(list_id: str, payload: DietListInput):
    repo = DietListRepository()
    diet_list = _get_or_404(repo, list_id)
    if diet_list.dietitian_id != payload.dietitian_id:
        raise HTTPException(status_code=404, detail="Diet list not found")
    content, mode = _body_to_content(payload)
    if not content:
        raise HTTPException(status_code=400, detail="Diet list content is empty")
    diet_list.content = content
    diet_list.mode = mode
    if payload.title:
        diet_list.title = payload.title
    repo.save(diet_list)
    return _serialize(diet_list)


@router.delete("/api/diet-lists/{list_id}")
def delete_diet_list(list_id: str):
    if not DietListRepository().delete(list_id):
        raise HTTPException(status_code=404, detail="Diet list not found")
    return {"status": "deleted", "id": list_id}


@router.get("/api/diet-lists/{list_id}/whatsapp")
def share_diet_list(list_id: str, client_name: str = Query(..., min_length=1),
                    phone: Optional[str] = Query(default=None)):
    diet_list = _get_or_404(DietListRepository(), list_id)
    message = diet_list_message(client_name, diet_list.content)
    url = whatsapp_url(phone, message)
    if phone and url is None:
        raise HTTPException(status_code=400, detail="Invalid phone number format")
    return {"message": message, "url": url}
