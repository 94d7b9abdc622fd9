from plant_identifier.extractor import (
    MARKERS,
    PlantInfo,
    extract_plant_info,
    match_marker,
    response_text,
)

SAMPLE_ANSWER = """Sweetbriar Rose

Scientific Name: Rosa rubiginosa
Family: Rosaceae

Description:
A deciduous shrub with arching, prickly stems.
The leaves smell of apples when crushed.

Care Instructions:
Prune lightly after flowering.

Sunlight:
Full sun.

Watering Needs:
Water deeply once a week.

Plant Health:
The leaves look healthy.

Additional Information:
Hips are rich in vitamin C.
"""


def test_full_answer() -> None:
    info = extract_plant_info(SAMPLE_ANSWER)

    assert info.name == "Sweetbriar Rose"
    assert info.scientific_name == "Rosa rubiginosa"
    assert info.family == "Rosaceae"
    assert info.descript == (
        "A deciduous shrub with arching, prickly stems.\n"
        "The leaves smell of apples when crushed."
    )
    assert info.care_instructions == "Prune lightly after flowering."
    assert info.sunlight_needs == "Full sun."
    assert info.watering_needs == "Water deeply once a week."
    assert info.plant_health == "The leaves look healthy."
    assert info.additional_info == "Hips are rich in vitamin C."


def test_scientific_name_regardless_of_surroundings() -> None:
    text = "Intro line\nDescription:\nsomething\nScientific Name: Rosa rubiginosa\nmore"
    assert extract_plant_info(text).scientific_name == "Rosa rubiginosa"


def test_no_markers_first_non_empty_line_is_name() -> None:
    info = extract_plant_info("\n\n   \nA lovely fern\nSecond line\nThird line")

    assert info.name == "A lovely fern"
    assert info == PlantInfo(name="A lovely fern")


def test_empty_input_gives_empty_record() -> None:
    assert extract_plant_info("") == PlantInfo()
    assert extract_plant_info(None) == PlantInfo()


def test_marker_matches_anywhere_in_line() -> None:
    text = "Monstera\nHere is a short Description: of the plant\nLarge split leaves."
    info = extract_plant_info(text)

    assert info.descript == "Large split leaves."


def test_marker_detection_ignores_case_but_removal_does_not() -> None:
    info = extract_plant_info("scientific name: Ficus lyrata\nFAMILY: Moraceae")

    assert info.scientific_name == "scientific name: Ficus lyrata"
    assert info.family == "FAMILY: Moraceae"


def test_bold_markers_are_left_for_presentation() -> None:
    info = extract_plant_info("**Scientific Name:** Rosa canina")
    assert info.scientific_name == "**** Rosa canina"


def test_inline_marker_does_not_move_cursor() -> None:
    text = "Description:\nFirst part.\nFamily: Rosaceae\nSecond part."
    info = extract_plant_info(text)

    assert info.family == "Rosaceae"
    assert info.descript == "First part.\nSecond part."


def test_section_lines_keep_blank_lines_inside() -> None:
    info = extract_plant_info("Description:\n\nLine one\n\nLine two\n\n")
    assert info.descript == "Line one\n\nLine two"


def test_reentered_section_keeps_appending() -> None:
    text = "Description:\nfirst\nSunlight:\nbright\nDescription:\nsecond"
    info = extract_plant_info(text)

    assert info.descript == "first\nsecond"
    assert info.sunlight_needs == "bright"


def test_no_name_after_section_starts() -> None:
    info = extract_plant_info("Care Instructions:\nKeep moist.")

    assert info.name == ""
    assert info.care_instructions == "Keep moist."


def test_first_marker_in_priority_order_wins() -> None:
    line = "Family: Rosaceae, Scientific Name: Rosa canina"
    assert match_marker(line).field == "scientific_name"
    assert extract_plant_info(line).scientific_name == "Family: Rosaceae, Rosa canina"


def test_marker_table_order() -> None:
    assert [m.text for m in MARKERS] == [
        "Scientific Name:",
        "Family:",
        "Description:",
        "Care Instructions:",
        "Sunlight:",
        "Watering Needs:",
        "Plant Health:",
        "Additional Information:",
    ]
    assert [m.inline for m in MARKERS] == [True, True] + [False] * 6
    assert match_marker("nothing to see") is None


def test_to_dict_uses_response_keys() -> None:
    info = PlantInfo(name="Rose", scientific_name="Rosa", sunlight_needs="Sun")
    assert info.to_dict() == {
        "name": "Rose",
        "scientificName": "Rosa",
        "family": "",
        "descript": "",
        "careInstructions": "",
        "sunlightNeeds": "Sun",
        "wateringNeeds": "",
        "plantHealth": "",
        "additionalInfo": "",
    }


def test_response_text() -> None:
    payload = {"candidates": [{"content": {"parts": [{"text": "Rose"}]}}]}
    assert response_text(payload) == "Rose"
    assert response_text({}) == ""
    assert response_text({"candidates": []}) == ""
    assert response_text({"candidates": [{"content": {"parts": [{}]}}]}) == ""
    assert response_text(None) == ""
