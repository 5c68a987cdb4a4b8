"""Shared field types"""

from decimal import Decimal
from typing import Annotated

from pydantic import PlainSerializer

# Monetary amounts are exact in memory but travel as JSON numbers
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]
