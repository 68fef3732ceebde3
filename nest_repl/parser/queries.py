"""Tree-sitter query patterns for the TypeScript grammars."""

from enum import Enum


class MethodShape(Enum):
    """Grammar productions treated as callable class members."""

    METHOD_DEFINITION = "method_definition"
    ARROW_FIELD = "arrow_field"


CLASS_NAMES_QUERY = """
(class_declaration name: (type_identifier) @class_name)
(abstract_class_declaration name: (type_identifier) @class_name)
"""

# Pattern order must match METHOD_SHAPES.
METHODS_QUERY = """
(method_definition
    name: (property_identifier) @name
    parameters: (formal_parameters) @params) @method
(public_field_definition
    name: (property_identifier) @name
    value: (arrow_function
        parameters: (formal_parameters) @params) @function) @method
"""

METHOD_SHAPES = (MethodShape.METHOD_DEFINITION, MethodShape.ARROW_FIELD)

FUNCTIONS_QUERY = """
(function_declaration) @function
(method_definition) @function
(arrow_function) @function
(function_expression) @function
(call_expression
    function: (parenthesized_expression (function_expression) @function))
(call_expression
    function: (parenthesized_expression (arrow_function) @function))
"""
