from trippy.services.llm_client import LLMClient, llm_client
from trippy.services.recommendation_service import FlightSupplier


def get_llm_client() -> LLMClient:
    return llm_client


def get_flight_supplier() -> FlightSupplier | None:
    """Live flight search is wired in by the deployment; without one the generator is used."""
    return None
