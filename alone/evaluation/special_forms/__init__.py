"""Registry of special forms for the Alone evaluator.

Maps expression node types to handler functions that implement non-standard
evaluation rules (only one branch of an `if` runs; `define` does not evaluate
its target). The evaluator consults this table before ordinary calls.
"""

from alone.types.expr import DefineExpr, IfExpr
from alone.evaluation.special_forms.if_form import if_form
from alone.evaluation.special_forms.define_form import define_form

SPECIAL_FORMS = {
    IfExpr: if_form,
    DefineExpr: define_form,
}
