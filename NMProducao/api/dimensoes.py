# api/dimensoes.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from schemas.dimensoes import FamiliaOut, SetorOut, TurnoOut
from services.dimensao_service import list_familias, list_setores, list_turnos
from utils.db import get_db

router = APIRouter(tags=["dimensoes"])


@router.get("/turnos", response_model=list[TurnoOut])
def get_turnos(db: Session = Depends(get_db)):
    return list_turnos(db)


@router.get("/setores", response_model=list[SetorOut])
def get_setores(db: Session = Depends(get_db)):
    return list_setores(db)


@router.get("/familias", response_model=list[FamiliaOut])
def get_familias(db: Session = Depends(get_db)):
    return list_familias(db)
