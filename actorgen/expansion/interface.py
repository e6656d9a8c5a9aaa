from ..utils.helpers import parse_item

TRAIT_NAME = "GameActor"

GET_TYPE_NAME = "get_type_name"
GET_HEALTH = "get_health"
GET_MANA = "get_mana"
SET_HEALTH = "set_health"
SET_MANA = "set_mana"

METHOD_NAMES = (GET_TYPE_NAME, GET_HEALTH, GET_MANA, SET_HEALTH, SET_MANA)

# A GameActor can name its own type, has some health and mana,
# and lets callers overwrite both.
INTERFACE_SOURCE = f"""
pub trait {TRAIT_NAME} {{
    fn {GET_TYPE_NAME}(&self) -> &str;
    fn {GET_HEALTH}(&self) -> &u64;
    fn {GET_MANA}(&self) -> &u64;
    fn {SET_HEALTH}(&mut self, amount: u64) -> ();
    fn {SET_MANA}(&mut self, amount: u64) -> ();
}}
"""


def capability_interface():
    """Fresh TraitDeclaration for the GameActor trait."""
    return parse_item(INTERFACE_SOURCE, filename="<GameActor>")


CAPABILITY_INTERFACE = capability_interface()
