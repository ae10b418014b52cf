# core/shopify_graphql/queries.py

GET_SHOP_QUERY = """
query getShop {
  shop {
    name
    myshopifyDomain
    currencyCode
    plan {
      displayName
    }
  }
}
"""
