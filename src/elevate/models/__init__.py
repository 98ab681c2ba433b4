from .inputs import Decision, HouseAsset, ModelParams

__all__ = ["Decision", "HouseAsset", "ModelParams"]
