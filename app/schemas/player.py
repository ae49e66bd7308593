"""Schemas de Player"""
from pydantic import Field, field_validator
from typing import List
from app.schemas.base import CamelInput
from app.schemas.common import PlayerSummary, MatchSummary, ParticipationFields


class PlayerCreate(CamelInput):
    """Schema para criação de Player"""
    name: str = Field(..., min_length=1, max_length=255)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class PlayerUpdate(PlayerCreate):
    """Somente o nome é editável; contadores pertencem ao ledger"""


class PlayerMatchResponse(ParticipationFields):
    """Participação do jogador, com a partida"""
    match: MatchSummary


class PlayerResponse(PlayerSummary):
    """Schema de resposta de Player"""
    matches: List[PlayerMatchResponse] = []
