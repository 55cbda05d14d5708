"""Operations on the contents of a Seedr account."""
