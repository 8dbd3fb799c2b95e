"""
Common schemas shared across API resources.
"""

from typing import Generic, List, TypeVar
from pydantic import BaseModel


T = TypeVar('T')


class ODataResponse(BaseModel, Generic[T]):
    """
    Collection wrapper returned by the OData API.

    Example:
        ODataResponse[Device].model_validate({"d": [{...}]})
    """
    d: List[T]
