"""Star decomposition, scan plans and join plans."""