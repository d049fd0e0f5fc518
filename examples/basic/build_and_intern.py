"""Build a property name from fragments and intern it — zero deps."""

from internable import InternableString, InternTable

table = InternTable(statistics_enabled=True)

# Wrapped: no copy until something is appended
name = InternableString("OutputPath")
print(name.startswith("Output"), table.intern(name))

# Built from pieces of existing text
source = "$(OutputPath)"
built = InternableString.new_empty(1).append(source, 2, len(source) - 3)
print(built.materialize(), table.intern(built) is table.intern(name))

print(table.statistics.summary())
