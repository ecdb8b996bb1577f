# ==========================================
# Go subset EBNF grammar (lark, LALR)
# ==========================================
# Semicolons are never written by hand in idiomatic Go: the SemicolonInserter
# postlexer turns the relevant newline tokens (_NL) into _SEMI tokens, so the
# grammar below only ever sees _SEMI.
GO_GRAMMAR = r"""
    start: package_clause _SEMI (import_decl _SEMI)* (_top_level_decl _SEMI)*

    package_clause: "package" IDENT

    // --- imports ---
    import_decl: "import" (import_spec | "(" _import_specs ")")
    _import_specs: import_spec? (_SEMI import_spec?)*
    import_spec: [import_alias] (STRING | RAW_STRING)
    !import_alias: IDENT | "."

    _top_level_decl: func_decl
                   | var_decl
                   | const_decl
                   | type_decl

    // --- functions ---
    func_decl: "func" [receiver] IDENT signature [block]
    receiver: parameters
    signature: parameters [result]
    result: parameters
          | type_expr

    parameters: "(" [_param_list] ")"
    _param_list: param ("," param)* [","]
    param: IDENT type_expr  -> named_param
         | type_expr        -> bare_param

    // --- types ---
    ?type_expr: type_name
              | qualified_type
              | pointer_type
              | slice_type
              | array_type
              | map_type
              | struct_type
              | func_type
              | interface_type
              | chan_type

    type_name: IDENT
    qualified_type: IDENT "." IDENT
    pointer_type: "*" type_expr
    slice_type: "[" "]" type_expr
    array_type: "[" expr "]" type_expr
    map_type: "map" "[" type_expr "]" type_expr
    struct_type: "struct" "{" _field_decls "}"
    _field_decls: field_decl? (_SEMI field_decl?)*
    field_decl: ident_list type_expr [STRING | RAW_STRING]
    func_type: "func" signature
    interface_type: "interface" "{" "}"
    chan_type: "chan" type_expr

    ident_list: IDENT ("," IDENT)*

    // --- declarations ---
    var_decl: "var" (var_spec | "(" _var_specs ")")
    _var_specs: var_spec? (_SEMI var_spec?)*
    ?var_spec: ident_list type_expr ["=" expr_list] -> typed_spec
             | ident_list "=" expr_list             -> untyped_spec

    const_decl: "const" (const_spec | "(" _const_specs ")")
    _const_specs: const_spec? (_SEMI const_spec?)*
    ?const_spec: ident_list type_expr "=" expr_list -> typed_spec
               | ident_list "=" expr_list           -> untyped_spec

    type_decl: "type" (type_spec | "(" _type_specs ")")
    _type_specs: type_spec? (_SEMI type_spec?)*
    type_spec: IDENT ["="] type_expr

    // --- statements ---
    block: "{" _statement_list "}"
    _statement_list: _statement? (_SEMI _statement?)*

    _statement: decl_stmt
              | labeled_stmt
              | _simple_stmt
              | go_stmt
              | return_stmt
              | break_stmt
              | continue_stmt
              | goto_stmt
              | fallthrough_stmt
              | block
              | if_stmt
              | switch_stmt
              | select_stmt
              | for_stmt
              | defer_stmt

    decl_stmt: var_decl | const_decl | type_decl
    labeled_stmt: IDENT ":" [_statement]

    _simple_stmt: expression_stmt
                | send_stmt
                | inc_dec_stmt
                | assignment
                | short_var_decl

    expression_stmt: expr
    send_stmt: expr "<-" expr
    inc_dec_stmt: expr inc_dec_op
    !inc_dec_op: "++" | "--"
    assignment: expr_list assign_op expr_list
    !assign_op: "=" | "+=" | "-=" | "*=" | "/=" | "%=" | "&=" | "|=" | "^=" | "<<=" | ">>=" | "&^="
    short_var_decl: expr_list ":=" expr_list
    expr_list: expr ("," expr)*

    go_stmt: "go" expr
    defer_stmt: "defer" expr
    return_stmt: "return" [expr_list]
    break_stmt: "break" [IDENT]
    continue_stmt: "continue" [IDENT]
    goto_stmt: "goto" IDENT
    fallthrough_stmt: "fallthrough"

    if_stmt: "if" [if_init] header_expr block [else_clause]
    if_init: header_stmt _SEMI
    else_clause: "else" (if_stmt | block)

    switch_stmt: "switch" [switch_init] [switch_tag] "{" (case_clause | default_clause)* "}"
    switch_init: [header_stmt] _SEMI
    switch_tag: header_stmt
    case_clause: "case" expr_list ":" _statement_list
    default_clause: "default" ":" _statement_list

    select_stmt: "select" "{" (comm_clause | default_clause)* "}"
    comm_clause: "case" _simple_stmt ":" _statement_list

    for_stmt: "for" [_for_header] block
    _for_header: while_header
               | for_clause
               | range_clause
    while_header: header_expr
    for_clause: [for_init] _SEMI [for_condition] _SEMI [for_post]
    for_init: header_stmt
    for_condition: header_expr
    for_post: header_stmt
    range_clause: [header_expr_list range_assign] "range" header_expr
    !range_assign: ":=" | "="

    // --- expressions (Go precedence, lowest first) ---
    ?expr: land_expr
         | expr "||" land_expr          -> logical_or
    ?land_expr: rel_expr
              | land_expr "&&" rel_expr -> logical_and
    ?rel_expr: add_expr
             | rel_expr rel_op add_expr -> binary_expr
    ?add_expr: mul_expr
             | add_expr add_op mul_expr -> binary_expr
    ?mul_expr: unary_expr
             | mul_expr mul_op unary_expr -> binary_expr
    ?unary_expr: primary_expr
               | unary_op unary_expr   -> unary

    !rel_op: "==" | "!=" | "<" | "<=" | ">" | ">="
    !add_op: "+" | "-" | "|" | "^"
    !mul_op: "*" | "/" | "%" | "<<" | ">>" | "&" | "&^"
    !unary_op: "+" | "-" | "!" | "^" | "*" | "&" | "<-"

    ?primary_expr: operand
                 | primary_expr "." IDENT                  -> selector
                 | primary_expr "." "(" type_expr ")"      -> type_assert
                 | primary_expr "." "(" "type" ")"         -> type_guard
                 | primary_expr "[" expr "]"               -> index
                 | primary_expr "[" [expr] ":" [expr] "]"  -> slice_expr
                 | primary_expr "(" [_call_args] ")"       -> call
                 | primary_expr literal_value              -> composite_lit
    _call_args: expr ("," expr)* [","]

    // type operands cover conversions and builtins such as make([]int, n)
    ?operand: literal
            | IDENT          -> name
            | "(" expr ")"   -> paren
            | _literal_type
            | chan_type
            | func_lit

    literal: INT | FLOAT | CHAR | STRING | RAW_STRING

    _literal_type: slice_type | array_type | map_type
    literal_value: "{" [_element_list] "}"
    _element_list: element ("," element)* [","]
    ?element: _element_value
            | _element_value ":" _element_value -> keyed_element
    _element_value: expr | literal_value

    func_lit: "func" signature block

    // --- if/for/switch headers ---
    // The "{" that follows a header opens the statement block, so a bare type
    // name cannot start a composite literal here; `if v == (T{}) {` still can.
    ?header_stmt: header_expr                                 -> expression_stmt
                | header_expr "<-" header_expr                -> send_stmt
                | header_expr inc_dec_op                      -> inc_dec_stmt
                | header_expr_list assign_op header_expr_list -> assignment
                | header_expr_list ":=" header_expr_list      -> short_var_decl
    header_expr_list: header_expr ("," header_expr)*          -> expr_list

    ?header_expr: header_land
                | header_expr "||" header_land      -> logical_or
    ?header_land: header_rel
                | header_land "&&" header_rel       -> logical_and
    ?header_rel: header_add
               | header_rel rel_op header_add       -> binary_expr
    ?header_add: header_mul
               | header_add add_op header_mul       -> binary_expr
    ?header_mul: header_unary
               | header_mul mul_op header_unary     -> binary_expr
    ?header_unary: header_primary
                 | unary_op header_unary            -> unary

    ?header_primary: header_operand
                   | header_primary "." IDENT                  -> selector
                   | header_primary "." "(" type_expr ")"      -> type_assert
                   | header_primary "." "(" "type" ")"         -> type_guard
                   | header_primary "[" expr "]"               -> index
                   | header_primary "[" [expr] ":" [expr] "]"  -> slice_expr
                   | header_primary "(" [_call_args] ")"       -> call

    ?header_operand: literal
                   | IDENT                        -> name
                   | "(" expr ")"                 -> paren
                   | _literal_type literal_value  -> composite_lit
                   | func_lit

    // --- terminals ---
    IDENT: /[^\W\d]\w*/
    INT: /0[xX][0-9a-fA-F_]+|0[bB][01_]+|0[oO][0-7_]+|\d[\d_]*/
    FLOAT.2: /\d[\d_]*\.\d*(?:[eE][+-]?\d+)?|\d[\d_]*[eE][+-]?\d+|\.\d[\d_]*(?:[eE][+-]?\d+)?/
    CHAR: /'(?:[^'\\\n]|\\(?:[abfnrtv\\'"]|[0-7]{3}|x[0-9a-fA-F]{2}|u[0-9a-fA-F]{4}|U[0-9a-fA-F]{8}))'/
    STRING: /"(?:[^"\\\n]|\\.)*"/
    RAW_STRING: /`[^`]*`/

    _SEMI: ";"
    _NL: /(\r?\n[\t \f]*)+/

    %import common.WS_INLINE
    %import common.CPP_COMMENT
    %import common.C_COMMENT
    %ignore WS_INLINE
    %ignore CPP_COMMENT
    %ignore C_COMMENT
"""
