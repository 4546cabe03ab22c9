# backend/routers/dependencies.py

from fastapi import Request

from services.dataset import DatasetServices


def get_services(request: Request) -> DatasetServices:
    return request.app.state.services
