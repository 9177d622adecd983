from mint_contracts.minting_policies.base import ClaimableMintPolicy, MintCall, MintStage, SignedPathPolicy
from mint_contracts.minting_policies.claimable_fungible import ClaimableFungible
from mint_contracts.minting_policies.claimable_semi_fungible import ClaimableSemiFungible
from mint_contracts.minting_policies.claimable_unique import ClaimableUnique
from mint_contracts.minting_policies.faucet import FaucetPolicy
