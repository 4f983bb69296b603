"""GraphQL queries for Morpho Blue API."""


class MorphoQueries:
    """GraphQL query definitions for Morpho Blue API."""

    # Market identifiers lending one asset, largest first
    MARKET_IDS_QUERY = """
    query GetMarketIds($first: Int!, $skip: Int, $chainId: Int!, $loanAsset: String!) {
        markets(
            first: $first
            skip: $skip
            where: { chainId_in: [$chainId], loanAssetAddress_in: [$loanAsset] }
            orderBy: SupplyAssetsUsd
            orderDirection: Desc
        ) {
            items {
                uniqueKey
                loanAsset {
                    address
                    symbol
                }
            }
        }
    }
    """
