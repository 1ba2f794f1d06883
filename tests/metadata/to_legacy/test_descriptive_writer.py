from sdr.metadata.cocina.description import Description
from sdr.metadata.to_legacy.descriptive.writer import DescriptiveWriter

OBJECT_ID = "druid:bc123kj8759"
NAMESPACES = {"mods": "http://www.loc.gov/mods/v3"}

PLACE = {
    "structured_value": [
        {"value": "United States", "type": "country"},
        {"value": "Stanford", "type": "city"},
    ],
    "type": "place",
    "source": {"code": "tgn"},
}


def write(**fields):
    description = Description(title=[{"value": "A"}], **fields)
    return DescriptiveWriter().write(description, OBJECT_ID)


def texts(root, path: str) -> list[str]:
    return [element.text for element in root.xpath(path, namespaces=NAMESPACES)]


class TestSubjectWriter:
    def test_hierarchical_place(self):
        root = write(subject=[PLACE])
        [place] = root.xpath("mods:subject/mods:hierarchicalGeographic", namespaces=NAMESPACES)
        assert place.get("authority") == "tgn"
        assert [child.tag.split("}")[1] for child in place] == ["country", "city"]
        assert texts(place, "mods:city") == ["Stanford"]

    def test_place_within_complex_subject(self):
        root = write(
            subject=[
                {
                    "structured_value": [{"value": "Maps", "type": "topic"}, PLACE],
                    "source": {"code": "lcsh"},
                }
            ]
        )
        [subject] = root.xpath("mods:subject", namespaces=NAMESPACES)
        assert subject.get("authority") == "lcsh"
        assert texts(subject, "mods:topic") == ["Maps"]
        assert texts(subject, "mods:hierarchicalGeographic/mods:country") == [
            "United States"
        ]

    def test_unknown_place_level(self, caplog):
        place = PLACE | {"structured_value": [{"value": "Earth", "type": "planet"}]}
        root = write(subject=[place])
        assert root.xpath("//mods:planet", namespaces=NAMESPACES) == []
        assert "Place level of type 'planet' not written" in caplog.text

    def test_cartographics(self):
        root = write(
            subject=[{"value": "W 122°--W 121°", "type": "map coordinates"}],
            form=[
                {"value": "Scale 1:24,000", "type": "map scale"},
                {"value": "Mercator", "type": "map projection"},
            ],
        )
        [cartographics] = root.xpath(
            "mods:subject/mods:cartographics", namespaces=NAMESPACES
        )
        assert [child.tag.split("}")[1] for child in cartographics] == [
            "scale",
            "projection",
            "coordinates",
        ]
        assert texts(cartographics, "mods:scale") == ["Scale 1:24,000"]
        assert root.xpath("mods:physicalDescription", namespaces=NAMESPACES) == []

    def test_map_forms_without_coordinates(self):
        root = write(form=[{"value": "1:100", "type": "map scale"}])
        assert texts(root, "mods:subject/mods:cartographics/mods:scale") == ["1:100"]
