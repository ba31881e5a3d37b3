"""
FastAPI dependencies — hand the request the components wired by the app factory.
"""

from fastapi import Request

from process_catalog.aggregator import MetadataAggregator
from process_catalog.engine import ProcessEngine


def get_aggregator(request: Request) -> MetadataAggregator:
    return request.app.state.aggregator


def get_engine(request: Request) -> ProcessEngine:
    return request.app.state.engine
