from typing import Literal

type Cursor = str
type HTTPMethod = Literal["GET", "POST", "PUT", "DELETE"]
type GeneralInfoKind = Literal["infografi", "penduduk", "saranaPendidikan", "saranaKesehatan"]

__all__ = [
    "Cursor",
    "GeneralInfoKind",
    "HTTPMethod",
]
