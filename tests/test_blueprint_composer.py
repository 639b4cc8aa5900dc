from mtg_set_builder.models.blueprint import MALFORMED_PROPERTY, BlueprintSource, BlueprintWithSource
from mtg_set_builder.validation import BlueprintComposer


def test_compose_concatenates_in_caller_order():
    blueprints = [
        BlueprintWithSource.of("set", {"subtypes": [{"key": "string-array/allow", "value": ["rabbit", "bear"]}]}),
        BlueprintWithSource.of("archetype", {"name": [{"key": "string/contain-one-of", "value": ["Miffy"]}]}),
        BlueprintWithSource.of("slot", {
            "subtypes": [
                {"key": "string-array/includes-all-of", "value": ["rabbit"]},
                {"key": "string-array/length", "value": {"key": "number/at-most", "value": 2}},
            ],
        }),
    ]

    composed = BlueprintComposer().compose(blueprints)

    assert list(composed) == ["subtypes", "name"]
    assert [(e.source, e.criterion.key) for e in composed["subtypes"]] == [
        (BlueprintSource.SET, "string-array/allow"),
        (BlueprintSource.SLOT, "string-array/includes-all-of"),
        (BlueprintSource.SLOT, "string-array/length"),
    ]
    assert [e.source for e in composed["name"]] == [BlueprintSource.ARCHETYPE]


def test_compose_adds_nothing_for_omitted_properties():
    composed = BlueprintComposer().compose([
        BlueprintWithSource.of("set", {}),
        BlueprintWithSource.of("cycle", {"rarity": [{"key": "string/equal", "value": "common"}]}),
    ])
    assert list(composed) == ["rarity"]
    assert len(composed["rarity"]) == 1


def test_compose_of_nothing_is_empty():
    assert BlueprintComposer().compose([]) == {}


def test_blueprint_parsing_is_lenient():
    tagged = BlueprintWithSource.of("slot", {
        "rarity": {"key": "string/equal", "value": "rare"},
        "types": ["creature"],
    })
    assert [c.key for c in tagged.blueprint["rarity"]] == ["string/equal"]
    # entries that are not criteria become criteria with no recognizable key
    assert tagged.blueprint["types"][0].key == ""
    assert tagged.blueprint["types"][0].value == "creature"


def test_blueprint_to_dict_round_trips():
    raw = {
        "subtypes": [
            {"key": "string-array/allow", "value": ["rabbit"]},
            {"key": "string-array/length", "value": {"key": "number/at-most", "value": 2}},
        ],
        "isToken": [{"key": "boolean/false"}],
    }
    tagged = BlueprintWithSource.of("cycle", raw)
    assert tagged.to_dict() == {"source": "cycle", "blueprint": raw}


def test_sequence_is_source_major():
    blueprints = [
        BlueprintWithSource.of("set", {
            "name": [{"key": "string/contain-one-of", "value": ["Miffy"]}],
            "subtypes": [{"key": "string-array/allow", "value": ["rabbit"]}],
        }),
        BlueprintWithSource.of("slot", {"name": [{"key": "string/equal", "value": "Miffy"}]}),
    ]
    sequence = BlueprintComposer().sequence(blueprints)
    assert [(prop, e.source.value) for prop, e in sequence] == [
        ("name", "set"),
        ("subtypes", "set"),
        ("name", "slot"),
    ]


def test_nested_criterion_with_bad_key_still_parses():
    tagged = BlueprintWithSource.of("set", {"name": [{"key": "string/length", "value": {"key": 7}}]})
    nested = tagged.blueprint["name"][0].value
    assert nested.key == "7"
    assert nested.namespace == "7"


def test_non_mapping_blueprint_becomes_one_failing_entry():
    tagged = BlueprintWithSource.of("archetype", ["name", "rarity"])
    assert list(tagged.blueprint) == [MALFORMED_PROPERTY]
    assert tagged.blueprint[MALFORMED_PROPERTY][0].key == ""
    assert tagged.blueprint[MALFORMED_PROPERTY][0].value == ["name", "rarity"]
