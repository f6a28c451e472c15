"""WPGraphQL documents used by the post routes."""

GET_POSTS = """
query GetPosts($first: Int = 10, $after: String) {
  posts(first: $first, after: $after) {
    nodes {
      id
      title
      slug
      excerpt
      date
      author { node { name } }
      categories { nodes { name slug } }
    }
    pageInfo {
      hasNextPage
      endCursor
    }
  }
}
"""

GET_POST_BY_SLUG = """
query GetPostBySlug($slug: ID!) {
  post(id: $slug, idType: SLUG) {
    id
    title
    slug
    content
    date
    author { node { name } }
    categories { nodes { name slug } }
  }
}
"""
