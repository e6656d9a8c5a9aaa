import pytest

from actorgen.ast2.nodes import Program
from actorgen.codegen import ActorModule
from actorgen.emitter import emit
from actorgen.expansion import inject, synthesize
from actorgen.items import items, starting_items
from actorgen.utils.helpers import parse

U64_MAX = 2**64 - 1


def _actor_module(*declarations: str) -> ActorModule:
    nodes = []
    for code in declarations:
        defn = inject(parse(code))
        nodes += [defn, synthesize(defn)]
    return ActorModule(Program(nodes))


@pytest.fixture(scope="module")
def game() -> ActorModule:
    return _actor_module(
        "pub struct Adventurer { pub items: HashMap<String, String> }",
        "pub struct Enemy {}",
    )


def test_adventurer_starts_with_ten_health_and_mana(game: ActorModule) -> None:
    adventurer = game.construct("Adventurer", items=starting_items(), health=10, mana=10)

    assert adventurer.get_health() == 10
    assert adventurer.get_mana() == 10
    assert adventurer.get_type_name() == "Adventurer"
    assert adventurer.items == starting_items()


def test_enemy_takes_one_point_of_damage(game: ActorModule) -> None:
    enemy = game.construct("Enemy", health=5, mana=5)

    enemy.set_health(enemy.get_health() - 1)

    assert enemy.get_health() == 4
    assert enemy.get_mana() == 5
    assert enemy.get_type_name() == "Enemy"


@pytest.mark.parametrize("value", [0, 1, 42, 2**32, U64_MAX])
def test_setters_then_getters(game: ActorModule, value: int) -> None:
    enemy = game.construct("Enemy", health=1, mana=1)

    enemy.set_health(value)
    enemy.set_mana(value)

    assert enemy.get_health() == value
    assert enemy.get_mana() == value


def test_health_wraps_like_an_unsigned_integer(game: ActorModule) -> None:
    enemy = game.construct("Enemy", health=0, mana=0)

    enemy.set_health(enemy.get_health() - 1)

    assert enemy.get_health() == U64_MAX


def test_fields_and_methods_share_storage(game: ActorModule) -> None:
    enemy = game.construct("Enemy", health=5, mana=5)

    enemy.health = 7
    assert enemy.get_health() == 7

    enemy.set_mana(9)
    assert enemy.mana == 9


def test_instances_are_independent(game: ActorModule) -> None:
    first = game.construct("Enemy", health=5, mana=5)
    second = game.construct("Enemy", health=5, mana=5)

    first.set_health(1)

    assert second.get_health() == 5


def test_handles_stay_on_the_python_side(game: ActorModule) -> None:
    loot = items(("mana_potion", "A mana potion"))
    adventurer = game.construct("Adventurer", items=loot, health=1, mana=1)

    adventurer.items = items(("rusty_sword", "Rusty, thus blazingly fast!"))

    assert adventurer.items == {"rusty_sword": "Rusty, thus blazingly fast!"}
    assert adventurer.get_health() == 1


def test_repr_reads_like_debug_output(game: ActorModule) -> None:
    assert repr(game.construct("Enemy", health=5, mana=5)) == "Enemy { health: 5, mana: 5 }"


def test_construct_requires_every_field(game: ActorModule) -> None:
    with pytest.raises(TypeError, match=r"missing fields `health` and `mana` in initializer of `Enemy`"):
        game.construct("Enemy")
    with pytest.raises(TypeError, match=r"missing field `mana` in initializer of `Enemy`"):
        game.construct("Enemy", health=1)


def test_construct_rejects_unknown_fields_and_types(game: ActorModule) -> None:
    with pytest.raises(TypeError, match=r"struct `Enemy` has no field named `level`"):
        game.construct("Enemy", health=1, mana=1, level=3)
    with pytest.raises(KeyError):
        game.construct("Ghost")


def test_unknown_members_and_bad_arity(game: ActorModule) -> None:
    enemy = game.construct("Enemy", health=1, mana=1)

    with pytest.raises(AttributeError):
        enemy.fly()
    with pytest.raises(AttributeError):
        enemy.level = 3
    with pytest.raises(TypeError, match=r"set_health\(\) takes 1 argument"):
        enemy.set_health()


def test_module_from_source_text() -> None:
    defn = inject(parse("struct Goblin { loot: u8 }"))
    source = emit(defn) + "\n\n" + emit(synthesize(defn)) + "\n"

    module = ActorModule(source, "goblin.rs")
    goblin = module.construct("Goblin", loot=3, health=2, mana=1)

    assert goblin.loot == 3
    assert goblin.get_health() == 2
    assert goblin.get_type_name() == "Goblin"
