"""
Source root for the ChickChain consumer trace service.
"""
