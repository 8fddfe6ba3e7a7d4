"""
Portal resource items.

Field rules belong to the server; these models only map the wire names and
keep whatever else the server sends.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ResourceItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str | None = None


class Location(BaseModel):
    model_config = ConfigDict(extra="allow")

    alamat: str | None = None


class Business(ResourceItem):
    """UMKM: a micro, small or medium business listed on the portal."""

    name: str | None = Field(default=None, alias="nama")
    description: str | None = Field(default=None, alias="deskripsi")
    category: str | None = Field(default=None, alias="kategori")
    image: str | None = Field(default=None, alias="gambar")
    start_price: float | None = Field(default=None, alias="startPrice")
    end_price: float | None = Field(default=None, alias="endPrice")
    phone: str | None = Field(default=None, alias="telepon")
    location: Location | None = Field(default=None, alias="lokasi")


class News(ResourceItem):
    title: str | None = Field(default=None, alias="judul")
    content: str | None = Field(default=None, alias="isi")
    image: str | None = Field(default=None, alias="gambar")
    published_at: Any = Field(default=None, alias="tanggal")


class GalleryItem(ResourceItem):
    title: str | None = Field(default=None, alias="judul")
    image: str | None = Field(default=None, alias="gambar")


class GeneralInfo(ResourceItem):
    kind: str | None = Field(default=None, alias="jenis")
