"""Example interpreters shipped with linecmd."""
from .calc import BadValueError, Calculator, StackUnderflowError
from .phonebook import PhoneBook

EXAMPLES = {
    'calc': Calculator,
    'phonebook': PhoneBook,
}

__all__ = ['Calculator', 'PhoneBook', 'StackUnderflowError', 'BadValueError', 'EXAMPLES']
