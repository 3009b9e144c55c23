from fastapi import Depends
from sqlalchemy.orm import Session

from app.api.catalogo.services.service_catalogo import CatalogoService
from app.database.db_connection import get_db


def get_catalogo_service(db: Session = Depends(get_db)) -> CatalogoService:
    return CatalogoService(db)
