from typing import Annotated, Any, ClassVar, Dict, List, Optional, Sequence
from pydantic import BeforeValidator, Field, field_validator

from slowtravel.content.normalize import (
    DEFAULT_ORDER,
    convert_drive_url,
    is_published,
    normalize_text,
    parse_int,
    parse_number,
    parse_order,
    split_list,
)
from .base import SheetRecord


def _list_of(separator: str):
    def parse(value: Any) -> List[str]:
        if isinstance(value, (list, tuple)):
            return [str(v) for v in value]
        return split_list(value, separator)
    return parse


Flag = Annotated[bool, BeforeValidator(is_published)]
Order = Annotated[int, BeforeValidator(parse_order)]
Text = Annotated[str, BeforeValidator(normalize_text)]
ImageUrl = Annotated[str, BeforeValidator(convert_drive_url)]
Price = Annotated[float, BeforeValidator(parse_number)]
Count = Annotated[int, BeforeValidator(parse_int)]
CommaList = Annotated[List[str], BeforeValidator(_list_of(","))]
PipeList = Annotated[List[str], BeforeValidator(_list_of("|"))]
SourceList = Annotated[List[str], BeforeValidator(_list_of(";;"))]


# Level 1: regions (Cities, Mountains, Coastal, Desert)
class Region(SheetRecord):
    COLUMNS: ClassVar[Dict[str, str]] = {
        "slug": "slug",
        "title": "title",
        "subtitle": "subtitle",
        "heroImage": "hero_image",
        "description": "description",
        "order": "order",
    }

    slug: Text = ""
    title: Text = ""
    subtitle: Text = ""
    hero_image: ImageUrl = ""
    description: Text = ""
    order: Order = DEFAULT_ORDER


# Level 2: destinations (Marrakech, Fes, ...)
class Destination(SheetRecord):
    COLUMNS: ClassVar[Dict[str, str]] = {
        "slug": "slug",
        "title": "title",
        "subtitle": "subtitle",
        "region": "regions",
        "heroImage": "hero_image",
        "heroCaption": "hero_caption",
        "excerpt": "excerpt",
        "body": "body",
        "published": "published",
        "featured": "featured",
        "order": "order",
    }

    slug: Text = ""
    title: Text = ""
    subtitle: Text = ""
    regions: CommaList = Field(default_factory=list)
    hero_image: ImageUrl = ""
    hero_caption: Text = ""
    excerpt: Text = ""
    body: Text = ""
    published: Flag = False
    featured: Flag = False
    order: Order = DEFAULT_ORDER

    @property
    def primary_region(self) -> Optional[str]:
        return self.regions[0].lower() if self.regions else None

    def in_region(self, region_slug: str) -> bool:
        return region_slug.strip().lower() in (r.lower() for r in self.regions)


# Level 3: places (Palais Bahia, Jardin Majorelle, ...)
class Place(SheetRecord):
    COLUMNS: ClassVar[Dict[str, str]] = {
        "slug": "slug",
        "title": "title",
        "subtitle": "subtitle",
        "destination": "destination",
        "category": "category",
        "address": "address",
        "opening_hours": "opening_hours",
        "fees": "fees",
        "notes": "notes",
        "heroImage": "hero_image",
        "heroCaption": "hero_caption",
        "excerpt": "excerpt",
        "body": "body",
        "sources": "sources",
        "tags": "tags",
        "textBy": "text_by",
        "year": "year",
        "readTime": "read_time",
        "published": "published",
        "featured": "featured",
        "order": "order",
    }

    slug: Text = ""
    title: Text = ""
    subtitle: Text = ""
    destination: Text = ""
    category: Text = ""
    address: Text = ""
    opening_hours: Text = ""
    fees: Text = ""
    notes: Text = ""
    hero_image: ImageUrl = ""
    hero_caption: Text = ""
    excerpt: Text = ""
    body: Text = ""
    sources: SourceList = Field(default_factory=list)
    tags: CommaList = Field(default_factory=list)
    text_by: Text = ""
    year: Text = ""
    read_time: Text = ""
    published: Flag = False
    featured: Flag = False
    order: Order = DEFAULT_ORDER

    @property
    def word_count(self) -> int:
        return len(self.body.split()) if self.body else 0


class PlaceImage(SheetRecord):
    """One gallery image; the tab is read by column position, not header."""

    POSITIONS: ClassVar[Sequence[str]] = ("place_slug", "image_order", "image_url", "caption")

    place_slug: Text = ""
    image_order: Count = 0
    image_url: ImageUrl = ""
    caption: Text = ""

    @classmethod
    def from_cells(cls, cells: Sequence[Any]) -> "PlaceImage":
        data = {
            field: cells[index] if index < len(cells) else ""
            for index, field in enumerate(cls.POSITIONS)
        }
        return cls(**data)


class DayTrip(SheetRecord):
    COLUMNS: ClassVar[Dict[str, str]] = {
        "Slug": "slug",
        "Route_ID": "route_id",
        "Title": "title",
        "Short_Description": "short_description",
        "Duration_Hours": "duration_hours",
        "Final_Price_MAD": "price_mad",
        "Final_Price_EUR": "price_eur",
        "Departure_City": "departure_city",
        "Category": "category",
        "Hero_Image_URL": "hero_image",
        "Includes": "includes",
        "Excludes": "excludes",
        "Meeting_Point": "meeting_point",
        "Published": "published",
    }

    slug: Text = ""
    route_id: Text = ""
    title: Text = ""
    short_description: Text = ""
    duration_hours: Count = 0
    price_mad: Price = Field(0.0, alias="priceMAD")
    price_eur: Price = Field(0.0, alias="priceEUR")
    departure_city: Text = "Marrakech"
    category: Text = ""
    hero_image: ImageUrl = ""
    includes: PipeList = Field(default_factory=list)
    excludes: PipeList = Field(default_factory=list)
    meeting_point: Text = ""
    published: Flag = Field(False, exclude=True)

    @field_validator("departure_city")
    @classmethod
    def default_departure_city(cls, v: str) -> str:
        return v or "Marrakech"


class Route(SheetRecord):
    """Route narrative from the Content_Library tab."""

    COLUMNS: ClassVar[Dict[str, str]] = {
        "Route_ID": "route_id",
        "Route_Narrative": "narrative",
        "From_City": "from_city",
        "To_City": "to_city",
        "Via_Cities": "via_cities",
        "Travel_Time_Hours": "travel_time",
        "Activities": "activities",
        "Difficulty_Level": "difficulty",
        "Region": "region",
        "Image_URL_1": "route_image",
    }

    route_id: Text = ""
    narrative: Text = ""
    from_city: Text = "Marrakech"
    to_city: Text = ""
    via_cities: Text = ""
    travel_time: Text = ""
    activities: Text = ""
    difficulty: Text = ""
    region: Text = ""
    route_image: ImageUrl = ""

    @field_validator("from_city")
    @classmethod
    def default_from_city(cls, v: str) -> str:
        return v or "Marrakech"


class DayTripDetail(DayTrip):
    """A day trip joined with its route narrative."""

    narrative: Text = ""
    from_city: Text = "Marrakech"
    to_city: Text = ""
    via_cities: Text = ""
    travel_time: Text = ""
    activities: Text = ""
    difficulty: Text = ""
    region: Text = ""
    route_image: ImageUrl = ""

    @classmethod
    def combine(cls, trip: DayTrip, route: Optional[Route]) -> "DayTripDetail":
        data = trip.model_dump()
        if route is not None:
            data.update(route.model_dump(exclude={"route_id"}))
        return cls(**data)


class Addon(SheetRecord):
    COLUMNS: ClassVar[Dict[str, str]] = {
        "Addon_ID": "id",
        "Addon_Name": "name",
        "Description": "description",
        "Final_Price_MAD_PP": "price_mad",
        "Final_Price_EUR_PP": "price_eur",
        "Applies_To": "applies_to",
        "Published": "published",
    }

    id: Text = ""
    name: Text = ""
    description: Text = ""
    price_mad: Price = Field(0.0, alias="priceMAD")
    price_eur: Price = Field(0.0, alias="priceEUR")
    applies_to: PipeList = Field(default_factory=list)
    published: Flag = Field(False, exclude=True)

    def applies_to_trip(self, slug: str) -> bool:
        return slug in self.applies_to


class Journey(SheetRecord):
    COLUMNS: ClassVar[Dict[str, str]] = {
        "slug": "slug",
        "Slug": "slug",
        "title": "title",
        "Title": "title",
        "duration": "duration",
        "Duration": "duration",
        "description": "description",
        "Description": "description",
        "heroImage": "hero_image",
        "Hero_Image_URL": "hero_image",
        "destinations": "destinations",
        "Destinations": "destinations",
        "published": "published",
        "Published": "published",
    }

    slug: Text = ""
    title: Text = ""
    duration: Text = ""
    description: Text = ""
    hero_image: ImageUrl = ""
    destinations: CommaList = Field(default_factory=list)
    published: Flag = Field(False, exclude=True)

    def visits(self, destination: str) -> bool:
        return destination.strip().lower() in (d.lower() for d in self.destinations)


class WebsiteSetting(SheetRecord):
    COLUMNS: ClassVar[Dict[str, str]] = {"Key": "key", "Value": "value"}

    key: Text = ""
    value: Text = ""
