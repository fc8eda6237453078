"""Block features: initialization, dual mode, dependent inputs, mutations"""

from .base import init_block, interpolate
from .dependent import on_controller_change, remove_dependent_input, show_dependent_input
from .modes import change_modes, customize_context_menu
from .mutation import dict_to_mutation, mutation_to_dict, mutation_to_xml, xml_to_mutation

__all__ = [
    'init_block', 'interpolate',
    'change_modes', 'customize_context_menu',
    'show_dependent_input', 'remove_dependent_input', 'on_controller_change',
    'mutation_to_dict', 'dict_to_mutation', 'mutation_to_xml', 'xml_to_mutation',
]
