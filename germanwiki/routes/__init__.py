from fastapi import APIRouter
from . import german

router = APIRouter()
for route in (german,):
    router.include_router(route.router)
