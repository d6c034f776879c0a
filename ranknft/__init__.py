"""ranknft: top-100 NFT collection rank tokens with movement-colored images."""
