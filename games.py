import logging

from fastapi import APIRouter, Depends
from pymongo.database import Database

from database import (
    create_document, get_db, get_documents, parse_business_id,
    serialize_document, update_document,
)
from errors import ResourceNotFoundError, store_errors
from request_body import read_body
from schemas import Game

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/games", tags=["games"])

COLLECTION = "games"
NOT_FOUND = "Jeu vidéo non trouvé"
DELETED = "Jeu vidéo supprimé avec succès"


# ---------------------------------------------------------------------------------
# Games CRUD
# ---------------------------------------------------------------------------------
@router.get("")
def list_games(db: Database = Depends(get_db)):
    with store_errors():
        docs = get_documents(db, COLLECTION)
    return [serialize_document(d) for d in docs]


@router.get("/{game_id}")
def get_game(game_id: str, db: Database = Depends(get_db)):
    with store_errors():
        doc = db[COLLECTION].find_one({"id": parse_business_id(game_id)})
    if not doc:
        raise ResourceNotFoundError(NOT_FOUND, game_id)
    return serialize_document(doc)


@router.post("", status_code=201)
def create_game(body=Depends(read_body), db: Database = Depends(get_db)):
    with store_errors():
        game = Game.model_validate(body)
        doc = create_document(db, COLLECTION, game)
    logger.info("Game %s created", doc.get("id"))
    return serialize_document(doc)


@router.put("/{game_id}")
def update_game(game_id: str, body=Depends(read_body), db: Database = Depends(get_db)):
    with store_errors():
        business_id = parse_business_id(game_id)
        changes = Game.model_validate(body)
        doc = update_document(db, COLLECTION, business_id, changes)
    if not doc:
        raise ResourceNotFoundError(NOT_FOUND, game_id)
    return serialize_document(doc)


@router.delete("/{game_id}")
def delete_game(game_id: str, db: Database = Depends(get_db)):
    with store_errors():
        doc = db[COLLECTION].find_one_and_delete({"id": parse_business_id(game_id)})
    if not doc:
        raise ResourceNotFoundError(NOT_FOUND, game_id)
    logger.info("Game %s deleted", game_id)
    return {"message": DELETED}
