"""Style rules for C files and the rule set that runs them."""