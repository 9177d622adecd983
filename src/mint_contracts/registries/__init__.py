from mint_contracts.registries.fungible import FungibleRegistry
from mint_contracts.registries.semi_fungible import SemiFungibleRegistry
from mint_contracts.registries.unique import UniqueRegistry
