"""People routes."""
from __future__ import annotations

from fastapi import APIRouter, status

from taskboard.core.schemas import PersonCreate
from taskboard.core.types import Person
from taskboard.dependencies import Board

router = APIRouter()


@router.get("/people", response_model=list[Person])
async def list_people(board: Board):
    return await board.people.list()


@router.post("/people", response_model=Person, status_code=status.HTTP_201_CREATED)
async def create_person(body: PersonCreate, board: Board):
    return await board.people.create(body.name, body.email, body.id)
