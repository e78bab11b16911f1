from .json_codec import JsonStateCodec, decode_quantile, encode_quantile

__all__ = ["JsonStateCodec", "decode_quantile", "encode_quantile"]
