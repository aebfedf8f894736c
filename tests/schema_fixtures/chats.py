from graphql import parse

type_defs = parse(
    """
    extend type Query {
      chats: [Chat!]
    }

    type Chat {
      id: ID!
      title: String!
      members: [User!]
    }
    """
)

resolvers = {
    "Query": {
        "chats": lambda obj, info: [
            {"id": 0, "title": "Apollo", "members": [0]},
            {"id": 1, "title": "EngSys", "members": [0]},
            {"id": 2, "title": "General", "members": [0, 1]},
        ],
    },
}
