from autowirer.exceptions import (
    AutoWirerAmbiguousConstructorError,
    AutoWirerAmbiguousInstanceError,
    AutoWirerCircularDependencyError,
    AutoWirerCleanupError,
    AutoWirerError,
    AutoWirerInvalidConstructorShapeError,
    AutoWirerInvalidRegistrationError,
    AutoWirerUnknownDependencyError,
)
from autowirer.lifecycle import Cleanable, Initializable
from autowirer.policies import GuardPolicy
from autowirer.wirer import AutoWirer
from autowirer.wirer_interface import IAutoWirer

__all__ = [
    "AutoWirer",
    "AutoWirerAmbiguousConstructorError",
    "AutoWirerAmbiguousInstanceError",
    "AutoWirerCircularDependencyError",
    "AutoWirerCleanupError",
    "AutoWirerError",
    "AutoWirerInvalidConstructorShapeError",
    "AutoWirerInvalidRegistrationError",
    "AutoWirerUnknownDependencyError",
    "Cleanable",
    "GuardPolicy",
    "IAutoWirer",
    "Initializable",
]
