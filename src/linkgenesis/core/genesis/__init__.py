"""
Genesis document loading, validation and first-boot generation.
"""
from linkgenesis.core.models.genesis import GenesisDoc, GenesisError, MalformedGenesisError, \
    MissingChainIDError, NoValidatorsError, ZeroPowerValidatorError, BadConsensusParamsError, \
    GenesisIOError, current_genesis_time
from linkgenesis.core.genesis.loader import load_genesis, default_genesis_doc, init_files

__all__ = [
    "GenesisDoc",
    "GenesisError",
    "MalformedGenesisError",
    "MissingChainIDError",
    "NoValidatorsError",
    "ZeroPowerValidatorError",
    "BadConsensusParamsError",
    "GenesisIOError",
    "current_genesis_time",
    "load_genesis",
    "default_genesis_doc",
    "init_files"
]
